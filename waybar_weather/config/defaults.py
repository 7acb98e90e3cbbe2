"""Default templates and paths."""

DEFAULT_GEOLOCATION_FILE = "~/.config/waybar-weather/geolocation"

DEFAULT_TEXT_TEMPLATE = (
    "{{ current.condition_icon }} "
    "{{ hum(current.temperature) }}{{ current.units.temperature }}"
)

DEFAULT_ALT_TEXT_TEMPLATE = (
    "{{ forecast.condition_icon }} "
    "{{ hum(forecast.temperature) }}{{ forecast.units.temperature }}"
)

DEFAULT_TOOLTIP_TEMPLATE = (
    "{{ address.city }}, {{ address.country }}\n"
    "{{ current.condition }}\n"
    "{{ loc('apparent') }}: {{ hum(current.apparent_temperature) }}{{ current.units.temperature }}\n"
    "{{ loc('humidity') }}: {{ float_format(current.relative_humidity, 0) }}{{ current.units.humidity }}\n"
    "{{ loc('pressure') }}: {{ hum(current.pressure_msl) }} {{ current.units.pressure }}\n"
    "{{ loc('wind') }}: {{ hum(current.wind_speed) }} → {{ hum(current.wind_gusts) }} "
    "{{ current.units.wind_speed }} "
    "({{ wind_dir_icon(wind_dir(current.wind_direction)) }} {{ wind_dir(current.wind_direction) }})\n"
    "\n"
    "🌅 {{ clock_time(sunrise_time) }} • 🌇 {{ clock_time(sunset_time) }}\n"
    "{{ moon_phase_icon }} {{ loc(moon_phase) }}"
)
