from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("voice-admin")
except PackageNotFoundError:
    __version__ = "0.0.0"

USER_AGENT = f"voice-admin/{__version__}"
