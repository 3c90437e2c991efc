class ScoringError(ValueError):
    """Base error for anything the scoring engine refuses to compute."""


class CourseConfigError(ScoringError):
    """Course or scorecard missing, or a hole the course doesn't have."""


class FormatValidationError(ScoringError):
    """Unknown game format or wrong number of teams for the format."""


class PotValidationError(ScoringError):
    """Side pots larger than what the players put in."""
