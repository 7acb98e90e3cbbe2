"""Polling service: fetches weather on an interval and prints waybar JSON.

Usage:
    waybar-weather run                 # loop until SIGTERM/SIGINT
    waybar-weather once --lat 52.52 --lon 13.41
    pkill -USR1 -f waybar-weather      # toggle text / alt text
"""

import asyncio
import json
import logging
import signal
import sys
import threading
from datetime import datetime
from typing import IO

from waybar_weather.astro import moon_phase
from waybar_weather.config.schema import AppConfig, WeatherProviderName
from waybar_weather.errors import GeocodeError, RenderError, WeatherError
from waybar_weather.i18n.localizer import CatalogLocalizer, Localizer, detect_language
from waybar_weather.ingest.location import read_geolocation_file
from waybar_weather.ingest.nominatim import CachedGeocoder, Geocoder, NominatimGeocoder
from waybar_weather.ingest.open_meteo import OpenMeteoClient
from waybar_weather.models.common import ZERO_TIME, Coordinate, local_now
from waybar_weather.models.geocode import Address
from waybar_weather.models.weather import Data, WeatherProvider
from waybar_weather.presenter.funcs import TemplateFunctions
from waybar_weather.presenter.renderer import RenderedOutput, TemplateRenderer
from waybar_weather.presenter.view import TemplateContext, build_context

logger = logging.getLogger(__name__)

OUTPUT_CLASS = "waybar-weather"
RETRY_BASE_SECONDS = 30


class WeatherService:
    """Owns the last good Data snapshot and drives fetch and output cycles.

    A failed fetch keeps the previous snapshot; a successful one replaces it
    whole under the snapshot lock.
    """

    def __init__(
        self,
        config: AppConfig,
        provider: WeatherProvider,
        renderer: TemplateRenderer,
        coords: Coordinate,
        geocoder: Geocoder | None = None,
        localizer: Localizer | None = None,
        stream: IO[str] | None = None,
    ):
        self.config = config
        self.provider = provider
        self.renderer = renderer
        self.coords = coords
        self.geocoder = geocoder
        self.localizer = localizer
        self.stream = stream or sys.stdout

        self._lock = threading.Lock()
        self._data: Data | None = None
        self._address = Address()
        self._display_alt_text = False
        self._consecutive_failures = 0
        self._stop: asyncio.Event | None = None

    @property
    def data(self) -> Data | None:
        with self._lock:
            return self._data

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    async def resolve_address(self) -> None:
        if self.geocoder is None:
            return
        try:
            address = await self.geocoder.reverse(self.coords)
        except GeocodeError as e:
            logger.warning("Reverse geocoding failed: %s", e)
            return
        if address.address_found:
            with self._lock:
                self._address = address
            logger.debug(
                "Address resolved to %r via %s", address.display_name, self.geocoder.name()
            )

    async def fetch_weather(self) -> bool:
        """Fetch one snapshot. Returns True when the snapshot was replaced."""
        try:
            data = await self.provider.get_weather(self.coords)
        except WeatherError as e:
            self._consecutive_failures += 1
            logger.error(
                "Failed to fetch weather from %s [%s]: %s",
                self.provider.name(), e.kind, e,
            )
            return False

        with self._lock:
            self._data = data
        self._consecutive_failures = 0
        logger.info(
            "Weather updated from %s: %d forecast hours",
            self.provider.name(), len(data.forecast),
        )
        return True

    def build_context(self, now: datetime | None = None) -> TemplateContext:
        with self._lock:
            data = self._data
            address = self._address

        now = now or local_now()
        sunrise = sunset = ZERO_TIME
        if data is not None:
            daily = data.daily_for(now, now.tzinfo)
            if daily is not None:
                sunrise, sunset = daily.sunrise, daily.sunset

        return build_context(
            address,
            data,
            sunrise,
            sunset,
            moon_phase(now),
            forecast_hours=self.config.weather.forecast_hours,
            localizer=self.localizer,
            now=now,
        )

    def render_output(self, now: datetime | None = None) -> dict[str, str] | None:
        """Render the bar payload, or None while no snapshot is available."""
        if self.data is None:
            logger.debug("No weather data available yet")
            return None
        try:
            rendered = self.renderer.render(self.build_context(now))
        except RenderError as e:
            logger.error("Failed to render %s template: %s", e.template_name, e)
            return None
        return format_output(rendered, self._display_alt_text)

    def print_weather(self) -> None:
        output = self.render_output()
        if output is None:
            return
        self.stream.write(json.dumps(output, ensure_ascii=False) + "\n")
        self.stream.flush()

    def toggle_alt_text(self) -> None:
        self._display_alt_text = not self._display_alt_text
        logger.debug("Alt text display toggled to %s", self._display_alt_text)
        self.print_weather()

    def stop(self) -> None:
        if self._stop is not None:
            self._stop.set()

    async def run_once(self) -> bool:
        await self.resolve_address()
        ok = await self.fetch_weather()
        if ok:
            self.print_weather()
        return ok

    async def run(self) -> None:
        """Run the fetch and output loops until stopped."""
        self._stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        self._setup_signals(loop)
        logger.info(
            "Service started: provider=%s coords=%.4f,%.4f update=%ds output=%ds",
            self.provider.name(), self.coords.lat, self.coords.lon,
            self.config.intervals.weather_update_seconds,
            self.config.intervals.output_seconds,
        )
        try:
            await self.resolve_address()
            async with asyncio.TaskGroup() as tg:
                tg.create_task(self._weather_loop())
                tg.create_task(self._output_loop())
        finally:
            self._remove_signals(loop)
            logger.info("Service stopped")

    async def _weather_loop(self) -> None:
        interval = self.config.intervals.weather_update_seconds
        while not self._stopped():
            if await self.fetch_weather():
                self.print_weather()
                wait = interval
            else:
                wait = min(
                    RETRY_BASE_SECONDS * 2 ** (self._consecutive_failures - 1), interval
                )
                logger.warning(
                    "Fetch failed (%d consecutive), retrying in %ds",
                    self._consecutive_failures, wait,
                )
            await self._sleep(wait)

    async def _output_loop(self) -> None:
        interval = self.config.intervals.output_seconds
        while not self._stopped():
            await self._sleep(interval)
            if not self._stopped():
                self.print_weather()

    def _stopped(self) -> bool:
        return self._stop is not None and self._stop.is_set()

    async def _sleep(self, seconds: float) -> None:
        """Sleep, returning early when the service is stopped."""
        assert self._stop is not None
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=seconds)
        except TimeoutError:
            pass

    def _setup_signals(self, loop: asyncio.AbstractEventLoop) -> None:
        try:
            loop.add_signal_handler(signal.SIGUSR1, self.toggle_alt_text)
            loop.add_signal_handler(signal.SIGTERM, self.stop)
            loop.add_signal_handler(signal.SIGINT, self.stop)
        except NotImplementedError:
            logger.warning("Signal handlers are not supported on this platform")

    def _remove_signals(self, loop: asyncio.AbstractEventLoop) -> None:
        try:
            for sig in (signal.SIGUSR1, signal.SIGTERM, signal.SIGINT):
                loop.remove_signal_handler(sig)
        except NotImplementedError:
            pass


def format_output(rendered: RenderedOutput, display_alt_text: bool = False) -> dict[str, str]:
    """Waybar custom-module JSON payload; `alt` names the active mode."""
    return {
        "text": rendered.alt_text if display_alt_text else rendered.text,
        "alt": "alt_text" if display_alt_text else "text",
        "tooltip": rendered.tooltip,
        "class": OUTPUT_CLASS,
    }


def resolve_coordinates(
    config: AppConfig, lat: float | None = None, lon: float | None = None
) -> Coordinate:
    """Explicit coordinates, then configured ones, then the geolocation file."""
    if lat is not None and lon is not None:
        return Coordinate(lat=lat, lon=lon)
    location = config.location
    if location.latitude is not None and location.longitude is not None:
        return Coordinate(lat=location.latitude, lon=location.longitude)
    return read_geolocation_file(location.geolocation_file)


def create_provider(config: AppConfig) -> WeatherProvider:
    if config.weather.provider == WeatherProviderName.OPEN_METEO:
        return OpenMeteoClient(units=config.units)
    raise ValueError(f"unsupported weather provider: {config.weather.provider}")


def create_service(
    config: AppConfig, coords: Coordinate, stream: IO[str] | None = None
) -> WeatherService:
    """Wire localizer, renderer, provider and geocoder from the config.

    Raises TemplateCompileError when a configured template is invalid.
    """
    localizer = CatalogLocalizer(detect_language(config.locale))
    templates = config.resolved_templates()
    renderer = TemplateRenderer(
        templates.text,
        templates.alt_text,
        templates.tooltip,
        TemplateFunctions(localizer),
    )
    geocoder = None
    if config.geocoder.enabled:
        geocoder = CachedGeocoder(NominatimGeocoder(language=localizer.locale.language))
    return WeatherService(
        config,
        create_provider(config),
        renderer,
        coords,
        geocoder=geocoder,
        localizer=localizer,
        stream=stream,
    )
