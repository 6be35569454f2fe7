import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# request bodies with these keys are logged with the value masked
REDACTED_FIELDS = {"password"}


def configure_logging(level: str = "INFO") -> None:
    """Setup root logging with consistent formatting"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Prevent duplicate handlers when the app is created twice (tests)
    if any(getattr(h, "_socialblog", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._socialblog = True
    root.addHandler(handler)


def redact(payload):
    """Mask sensitive values in a decoded JSON request body"""
    if isinstance(payload, dict):
        return {
            key: "***" if key in REDACTED_FIELDS else redact(value)
            for key, value in payload.items()
        }
    if isinstance(payload, list):
        return [redact(item) for item in payload]
    return payload
