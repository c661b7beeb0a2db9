class DomainError(ValueError):
    """Physical configuration the circuit model cannot evaluate (R <= 0, V <= 0, non-finite input)."""


class AnimatorStoppedError(RuntimeError):
    """A frame was requested from an animator that has been stopped."""
