"""
The five APEST ministry roles.
Role identity lives here so every other module works against a closed enumeration
instead of string-keyed lookups. Declaration order is the canonical order used for
all deterministic tie-breaks (apostle < prophet < evangelist < shepherd < teacher).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------- Role enum (exactly these 5) ----------


class Role(str, Enum):
    APOSTLE = "apostle"
    PROPHET = "prophet"
    EVANGELIST = "evangelist"
    SHEPHERD = "shepherd"
    TEACHER = "teacher"


# Canonical order. Enum iteration follows declaration order, but tie-break code
# indexes into this tuple so the order is explicit at every call site.
ROLE_ORDER: tuple[Role, ...] = tuple(Role)


def role_rank(role: Role) -> int:
    """Position of role in the canonical order (0 = apostle)."""
    return ROLE_ORDER.index(role)


# ---------- Role definitions (shown to users) ----------


@dataclass(frozen=True)
class RoleDefinition:
    name: str
    label: str  # label used by the questionnaire UI (Dutch)
    description: str


ROLE_DEFINITIONS: dict[Role, RoleDefinition] = {
    Role.APOSTLE: RoleDefinition(
        name="Apostle",
        label="Apostel",
        description="Pioneer and visionary. Sees the big picture, lays new foundations, thrives on challenge and change.",
    ),
    Role.PROPHET: RoleDefinition(
        name="Prophet",
        label="Profeet",
        description="Hears and speaks truth. Notices what is going wrong and how it can be put right.",
    ),
    Role.EVANGELIST: RoleDefinition(
        name="Evangelist",
        label="Evangelist",
        description="Passionate about sharing good news and reaching people outside the community.",
    ),
    Role.SHEPHERD: RoleDefinition(
        name="Shepherd",
        label="Herder",
        description="Cares for people. Focused on relationships, emotional health and a safe environment.",
    ),
    Role.TEACHER: RoleDefinition(
        name="Teacher",
        label="Leraar",
        description="Understands and explains complex ideas. Enjoys discovering truth and passing it on.",
    ),
}


def get_role_definition(role: Role) -> RoleDefinition:
    return ROLE_DEFINITIONS[role]


def list_all_roles() -> list[tuple[Role, RoleDefinition]]:
    """For API/frontend: list all roles with definitions, in canonical order."""
    return [(r, ROLE_DEFINITIONS[r]) for r in ROLE_ORDER]


# ---------- Boundary normalization ----------
# Stored records name the shepherd role "herder"; questionnaire payloads may use the
# Dutch labels. Everything is mapped onto the enum before it reaches the core.

ROLE_ALIASES: dict[str, Role] = {
    "apostle": Role.APOSTLE,
    "apostel": Role.APOSTLE,
    "prophet": Role.PROPHET,
    "profeet": Role.PROPHET,
    "evangelist": Role.EVANGELIST,
    "shepherd": Role.SHEPHERD,
    "herder": Role.SHEPHERD,
    "pastor": Role.SHEPHERD,
    "teacher": Role.TEACHER,
    "leraar": Role.TEACHER,
}


def parse_role(value: str | Role | None) -> Role | None:
    """Parse role string (or alias) to enum; None if invalid or empty."""
    if isinstance(value, Role):
        return value
    if not value:
        return None
    return ROLE_ALIASES.get(value.strip().lower())


def normalize_role(value: str | Role) -> Role:
    """Like parse_role, but unknown names are an error."""
    role = parse_role(value)
    if role is None:
        raise ValueError(
            f"Unknown role: {value!r}. Use one of: {', '.join(r.value for r in ROLE_ORDER)}"
        )
    return role
