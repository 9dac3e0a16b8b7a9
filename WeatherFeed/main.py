"""Command line front end: fetch weather and print the JSON envelope."""
import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from api_response import ValidationError, error_response, handle_weather_api_error, success_response
from config import Config, ConfigError, load_config
from openweather_provider import OpenWeatherProvider
from weather_provider import WeatherProviderError
from weather_service import WeatherService


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("weatherfeed", description="Current weather and daily forecasts")
    parser.add_argument("--api-key", help="Overrides OPENWEATHERMAP_API_KEY")
    parser.add_argument("--timeout", type=int, help="HTTP timeout in seconds")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--verbose", action="store_true")

    commands = parser.add_subparsers(dest="command", required=True)

    current = commands.add_parser("current", help="Current conditions")
    current.add_argument("location", help='City query, e.g. "London,GB"')
    current.add_argument("--units", choices=["metric", "imperial", "kelvin"], default="")

    forecast = commands.add_parser("forecast", help="Daily forecast")
    forecast.add_argument("location", help='City query, e.g. "London,GB"')
    forecast.add_argument("--units", choices=["metric", "imperial", "kelvin"], default="")
    forecast.add_argument("--days", type=int, default=5)

    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    # Logs go to stderr so stdout stays valid JSON
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def build_weather_service(config: Config) -> WeatherService:
    provider = OpenWeatherProvider(
        api_key=config.api_key,
        base_url=config.base_url,
        lang=config.lang,
        timeout=config.timeout,
    )
    logging.info("Weather service ready (timeout=%ss)", config.timeout)
    return WeatherService(provider=provider, default_units=config.units)


def run(args: argparse.Namespace, service: WeatherService) -> Dict[str, Any]:
    """Execute one command and return the response envelope."""
    try:
        if args.command == "current":
            report = service.get_current(args.location, args.units)
        else:
            report = service.get_forecast(args.location, args.units, args.days)
    except (ValidationError, WeatherProviderError) as err:
        logging.error("Weather request failed: %s", err)
        return error_response(handle_weather_api_error(err))
    return success_response(report.to_dict())


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    config = load_config()
    if not args.verbose:
        logging.getLogger().setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    if args.api_key:
        config.api_key = args.api_key
    if args.timeout:
        config.timeout = args.timeout

    try:
        config.validate()
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    service = build_weather_service(config)
    try:
        envelope = run(args, service)
    finally:
        service.provider.close()

    json.dump(envelope, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0 if envelope["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
