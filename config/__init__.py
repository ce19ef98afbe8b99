"""Configuration package utilities."""

__all__ = ["ConfigController", "parse_time_of_day"]


def __getattr__(name: str):
    if name == "ConfigController":
        from config.controller import ConfigController

        return ConfigController
    if name == "parse_time_of_day":
        from config.controller import parse_time_of_day

        return parse_time_of_day
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
