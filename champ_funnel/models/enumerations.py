from enum import Enum

class Choice(str, Enum):
    A = "A"
    B = "B"
    C = "C"

class Archetype(str, Enum):
    # Declaration order is the tie-break order when scores are equal
    BUILDER = "Builder"
    TRANSLATOR = "Translator"
    ARCHITECT = "Architect"

class Tier(str, Enum):
    TIER1 = "Tier1"              # Priority track
    TIER2 = "Tier2"              # Some signals, not Tier 1
    OPEN_NETWORK = "OpenNetwork" # Everyone else

class DisagreementStyle(str, Enum):
    AVOID = "Avoid it"
    MEDIATE = "Mediate it"
    REDESIGN = "Redesign structure around it"

class DrainSource(str, Enum):
    ENDLESS_TALK = "Endless talk"
    PUBLIC_EXPOSURE = "Public exposure"
    SLOW_PROGRESS = "Slow progress"
    CHAOS = "Chaos"

class GateState(str, Enum):
    LOCKED = "Locked"
    CALIBRATING = "Calibrating"
    UNLOCKED = "Unlocked"

class GateVertex(str, Enum):
    TOP = "top"
    BOTTOM_LEFT = "bottomLeft"
    BOTTOM_RIGHT = "bottomRight"

# Hours/month options offered by the capacity step
AVAILABILITY_OPTIONS = (2, 4, 6, 8, 10, 15, 20)
