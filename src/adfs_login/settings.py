"""Resolve login credentials from the config file, environment and prompt."""

from __future__ import annotations

import configparser
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import typer

from .config import Credentials, normalize_hostname
from .exceptions import CredentialsError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "auth-aws" / "config.ini"
SETTINGS_SECTION = "default"

# field -> (ini key, environment variable, prompt label)
FIELD_SOURCES: Mapping[str, tuple[str, str, str]] = {
    "username": ("user", "ADFS_USER", "Username"),
    "password": ("pass", "ADFS_PASS", "Password"),
    "hostname": ("host", "ADFS_HOST", "Hostname"),
}

SOURCE_FILE = "file"
SOURCE_ENV = "env"
SOURCE_OPTION = "option"
SOURCE_PROMPT = "prompt"

Prompt = Callable[[str, bool], str]


def _typer_prompt(label: str, hide_input: bool) -> str:
    return typer.prompt(label, hide_input=hide_input)


@dataclass(slots=True)
class ResolvedSettings:
    """Credential values together with where each one came from."""

    values: dict[str, str] = field(default_factory=dict)
    sources: dict[str, str] = field(default_factory=dict)

    def set(self, name: str, value: str | None, source: str) -> None:
        if value:
            self.values[name] = value
            self.sources[name] = source

    def missing(self) -> list[str]:
        return [name for name in FIELD_SOURCES if not self.values.get(name)]

    def to_credentials(self) -> Credentials:
        missing = self.missing()
        if missing:
            raise CredentialsError(
                f"Missing credential value(s): {', '.join(missing)}", details=missing
            )
        return Credentials(
            username=self.values["username"],
            password=self.values["password"],
            hostname=self.values["hostname"],
        )


def load_settings_file(path: Path) -> dict[str, str]:
    """Read the `[default]` section of an ini settings file.

    A missing file or section yields no values.
    """

    if not path.exists():
        return {}
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as exc:
        raise CredentialsError(f"Unable to read settings file {path}: {exc}") from exc
    if not parser.has_section(SETTINGS_SECTION):
        return {}
    section = parser[SETTINGS_SECTION]
    return {
        name: section[key]
        for name, (key, _env, _label) in FIELD_SOURCES.items()
        if section.get(key)
    }


def resolve_settings(
    *,
    username: str | None = None,
    password: str | None = None,
    hostname: str | None = None,
    settings_path: Path | None = DEFAULT_SETTINGS_PATH,
    environ: Mapping[str, str] | None = None,
    interactive: bool = True,
    prompt: Prompt = _typer_prompt,
) -> ResolvedSettings:
    """Merge settings file, environment, explicit values and prompts.

    Later sources override earlier ones; the prompt only asks for values that
    are still empty.
    """

    resolved = ResolvedSettings()
    if settings_path is not None:
        for name, value in load_settings_file(settings_path.expanduser()).items():
            resolved.set(name, value, SOURCE_FILE)
        logger.debug("Settings file %s provided %s", settings_path, sorted(resolved.values))

    env = os.environ if environ is None else environ
    for name, (_key, env_var, _label) in FIELD_SOURCES.items():
        resolved.set(name, env.get(env_var), SOURCE_ENV)

    explicit = {"username": username, "password": password, "hostname": hostname}
    for name, value in explicit.items():
        resolved.set(name, value, SOURCE_OPTION)

    if interactive:
        for name in resolved.missing():
            label = FIELD_SOURCES[name][2]
            resolved.set(name, prompt(label, name == "password").strip("\n"), SOURCE_PROMPT)

    if resolved.values.get("hostname"):
        resolved.values["hostname"] = normalize_hostname(resolved.values["hostname"])
    return resolved


def resolve_credentials(**kwargs) -> Credentials:
    """Return complete `Credentials` or raise `CredentialsError`."""

    return resolve_settings(**kwargs).to_credentials()
