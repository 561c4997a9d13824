"""
Error types raised by the Sideline Rotation engine.

Every failure is a local validation error raised before a new game state is
built, so the caller's last-good state is never touched. Callers can catch
:class:`LineupError` to handle all of them at once or one of the category
classes to be more specific.
"""


class LineupError(Exception):
    """Base class for every error raised by the rotation engine."""
    pass


# ---------- Configuration ---------- #

class ConfigurationError(LineupError):
    """Team configuration problems."""
    pass


class InvalidConfiguration(ConfigurationError):
    """Squad size, format, formation or lineup do not fit together."""
    pass


class InvalidGameState(ConfigurationError):
    """A stored game state contradicts itself (queue, formation, players)."""
    pass


# ---------- Formation catalog ---------- #

class FormationLookupError(LineupError):
    """A lookup against the formation catalog failed."""
    pass


class UnknownFormation(FormationLookupError):
    """The formation is not registered for the format and squad size."""
    pass


class InvalidPosition(FormationLookupError):
    """A position key is not valid for the current formation."""
    pass


# ---------- Rotation queue ---------- #

class RotationQueueError(LineupError):
    """Rotation queue precondition violations."""
    pass


class InvalidQueueComposition(RotationQueueError):
    """Queue ids are duplicated or do not match the squad."""
    pass


class PlayerNotInActiveQueue(RotationQueueError):
    """The player is not in the active segment of the queue."""
    pass


class PlayerAlreadyInactive(RotationQueueError):
    """The player is already in the inactive segment."""
    pass


class PlayerNotInactive(RotationQueueError):
    """The player is not in the inactive segment."""
    pass


# ---------- Substitutions ---------- #

class SubstitutionError(LineupError):
    """Substitution precondition violations."""
    pass


class InsufficientActivePlayers(SubstitutionError):
    """Not enough active players to perform the rotation."""
    pass


class InvalidSubstitutionType(SubstitutionError):
    """The substitution type is unknown or does not match the formation."""
    pass


# ---------- Game actions ---------- #

class GameActionError(LineupError):
    """Operation-specific violations in the game state engine."""
    pass


class InactiveUnsupported(GameActionError):
    """The team configuration does not allow inactive players."""
    pass


class CannotDeactivateFieldPlayer(GameActionError):
    """Only substitutes can be made inactive."""
    pass


class PlayerNotInSquad(GameActionError):
    """The player id is not part of the match squad."""
    pass


class PlayerInactive(GameActionError):
    """The requested action needs an active player."""
    pass


# ---------- Match session ---------- #

class NothingToUndo(LineupError):
    """The session has no earlier state to return to."""
    pass


class NothingToRedo(LineupError):
    """The session has no undone state to reapply."""
    pass


class MatchNotStarted(LineupError):
    """An action was requested before a match was set up."""
    pass


class UnknownAction(LineupError):
    """The session does not know the requested action."""
    pass
