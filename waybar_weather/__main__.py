import sys

from waybar_weather.cli import main

sys.exit(main())
