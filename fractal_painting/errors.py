class SurfaceUnavailable(RuntimeError):
    """Drawing access to an image surface could not be acquired."""


class InvalidSettings(ValueError):
    """Fractal settings that a painter refuses to run with."""
