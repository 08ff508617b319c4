"""Build the login form submission from scraped inputs."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from .config import Credentials
from .scrape import FormInput

FieldPredicate = Callable[[FormInput], bool]
FieldAction = Callable[[FormInput, Credentials], str]


@dataclass(frozen=True)
class FieldRule:
    """Fill a field matched by `predicate` with the value `action` returns."""

    label: str
    predicate: FieldPredicate
    action: FieldAction
    injects_credential: bool = True


def name_contains(fragment: str) -> FieldPredicate:
    lowered = fragment.lower()

    def _predicate(field: FormInput) -> bool:
        return lowered in field.name.lower()

    return _predicate


def _password(field: FormInput, credentials: Credentials) -> str:
    return credentials.password


def _username(field: FormInput, credentials: Credentials) -> str:
    return credentials.username


def _passthrough(field: FormInput, credentials: Credentials) -> str:
    return field.value


PASSTHROUGH_RULE = FieldRule(
    label="passthrough",
    predicate=lambda field: True,
    action=_passthrough,
    injects_credential=False,
)

# Evaluated top to bottom; "password" goes first so that a name such as
# "UsernamePassword" receives the password.
DEFAULT_RULES: tuple[FieldRule, ...] = (
    FieldRule(label="password", predicate=name_contains("password"), action=_password),
    FieldRule(label="username", predicate=name_contains("username"), action=_username),
)


def match_rule(field: FormInput, rules: Sequence[FieldRule] = DEFAULT_RULES) -> FieldRule:
    for rule in rules:
        if rule.predicate(field):
            return rule
    return PASSTHROUGH_RULE


def build_payload(
    inputs: Iterable[FormInput],
    credentials: Credentials,
    rules: Sequence[FieldRule] = DEFAULT_RULES,
) -> dict[str, str]:
    """Return the ordered form submission for `inputs`.

    Every distinct input name appears exactly once. When a name repeats, the
    later input's value replaces the earlier one.
    """

    payload: dict[str, str] = {}
    for field in inputs:
        payload[field.name] = match_rule(field, rules).action(field, credentials)
    return payload


def missing_credential_fields(
    inputs: Iterable[FormInput],
    rules: Sequence[FieldRule] = DEFAULT_RULES,
) -> list[str]:
    """Return the labels of credential rules that matched no input."""

    matched = {match_rule(field, rules).label for field in inputs}
    return [rule.label for rule in rules if rule.injects_credential and rule.label not in matched]
