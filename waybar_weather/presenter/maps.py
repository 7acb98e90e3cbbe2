"""Read-only lookup tables used by the presenter."""

MOON_PHASE_ICONS: dict[str, str] = {
    "New Moon": "🌑",
    "Waxing Crescent": "🌒",
    "First Quarter": "🌓",
    "Waxing Gibbous": "🌔",
    "Full Moon": "🌕",
    "Waning Gibbous": "🌖",
    "Third Quarter": "🌗",
    "Waning Crescent": "🌘",
}

# WMO weather interpretation codes
WMO_WEATHER_CODES: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

# Keyed by weather code, then by is_day
WMO_WEATHER_ICONS: dict[int, dict[bool, str]] = {
    0: {True: "☀️", False: "🌙"},
    1: {True: "🌤️", False: "🌙"},
    2: {True: "⛅", False: "☁️"},
    3: {True: "☁️", False: "☁️"},
    45: {True: "🌫️", False: "🌫️"},
    48: {True: "🌫️", False: "🌫️"},
    51: {True: "🌦️", False: "🌧️"},
    53: {True: "🌧️", False: "🌧️"},
    55: {True: "🌧️", False: "🌧️"},
    56: {True: "🌨️", False: "🌨️"},
    57: {True: "🌨️", False: "🌨️"},
    61: {True: "🌦️", False: "🌧️"},
    63: {True: "🌧️", False: "🌧️"},
    65: {True: "🌧️", False: "🌧️"},
    66: {True: "🌨️", False: "🌨️"},
    67: {True: "🌨️", False: "🌨️"},
    71: {True: "🌨️", False: "🌨️"},
    73: {True: "🌨️", False: "🌨️"},
    75: {True: "🌨️", False: "🌨️"},
    77: {True: "🌨️", False: "🌨️"},
    80: {True: "🌦️", False: "🌧️"},
    81: {True: "🌧️", False: "🌧️"},
    82: {True: "🌧️", False: "🌧️"},
    85: {True: "🌨️", False: "🌨️"},
    86: {True: "🌨️", False: "🌨️"},
    95: {True: "🌩️", False: "🌩️"},
    96: {True: "⛈️", False: "⛈️"},
    99: {True: "⛈️", False: "⛈️"},
}

# Semantic template keys -> message ids of the localization catalog
I18N_VARS: dict[str, str] = {
    "temp": "Temperature",
    "humidity": "Humidity",
    "winddir": "Wind direction",
    "windspeed": "Wind speed",
    "wind": "Wind",
    "pressure": "Pressure",
    "apparent": "Feels like",
    "weathercode": "Weather code",
    "forecastfor": "Forecast for",
    "weatherdatafor": "Weather data for",
    "sunrise": "Sunrise",
    "sunset": "Sunset",
    "moonphase": "Moonphase",
    "new moon": "New moon",
    "waxing crescent": "Waxing crescent",
    "first quarter": "First quarter",
    "waxing gibbous": "Waxing gibbous",
    "full moon": "Full moon",
    "waning gibbous": "Waning gibbous",
    "third quarter": "Third quarter",
    "waning crescent": "Waning crescent",
}

WIND_DIR_ICONS: dict[str, str] = {
    "N": "↑",
    "NE": "↗",
    "E": "→",
    "SE": "↘",
    "S": "↓",
    "SW": "↙",
    "W": "←",
    "NW": "↖",
}
