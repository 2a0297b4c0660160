"""
Configuration management.
"""

from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_DIR = Path.home() / ".pkgbridge" / "logs"


def _positive_int(value: Any) -> Optional[int]:
    """``value`` as an int >= 1, or None when it is not one."""
    try:
        value = int(value)
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None


def load_config_file(candidates: Optional[List[Path]] = None) -> dict[str, Any]:
    """
    Load optional config from ~/.pkgbridge.yaml or ./.pkgbridge.yaml.
    Returns dict with log_dir (Path), verbose (bool), timeout (int),
    install_timeout (int), sudo (str), prefer (list of str), max_workers (int).
    Missing or invalid keys are omitted so callers can use their own defaults.
    """
    result: dict[str, Any] = {}
    if candidates is None:
        candidates = [
            Path.home() / ".pkgbridge.yaml",
            Path.cwd() / ".pkgbridge.yaml",
        ]
    raw: dict[str, Any] = {}
    for path in candidates:
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    raw = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError):
                raw = {}
            break
    if not isinstance(raw, dict) or not raw:
        return result
    if "log_dir" in raw:
        result["log_dir"] = Path(str(raw["log_dir"])).expanduser().resolve()
    if "verbose" in raw:
        result["verbose"] = bool(raw["verbose"])
    for key in ("timeout", "install_timeout", "max_workers"):
        if key in raw:
            value = _positive_int(raw[key])
            if value is not None:
                result[key] = value
    if "sudo" in raw and raw["sudo"] is not None:
        result["sudo"] = str(raw["sudo"])
    if isinstance(raw.get("prefer"), list):
        result["prefer"] = [str(p) for p in raw["prefer"]]
    return result


class EnvSettings(BaseSettings):
    """Settings read from the process environment, once, at the CLI boundary."""

    model_config = SettingsConfigDict(env_prefix="PKGBRIDGE_", extra="ignore")

    sudo: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SUDO", "PKGBRIDGE_SUDO"),
    )
    timeout: Optional[int] = None
    verbose: Optional[bool] = None

    @field_validator('timeout', mode='before')
    @classmethod
    def validate_timeout(cls, v):
        """Unusable values fall back to the next configuration source."""
        return _positive_int(v)


class AppConfig(BaseModel):
    """Application configuration."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    log_dir: Path = Field(default=DEFAULT_LOG_DIR)
    verbose: bool = False
    timeout: int = 120
    install_timeout: int = 1800
    sudo: str = ""
    prefer: List[str] = Field(default_factory=list)
    max_workers: int = 8

    @field_validator('log_dir', mode='before')
    @classmethod
    def validate_log_dir(cls, v):
        """Validate and convert log_dir to Path."""
        if v is None:
            return DEFAULT_LOG_DIR
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v
        return DEFAULT_LOG_DIR

    @field_validator('sudo', mode='before')
    @classmethod
    def validate_sudo(cls, v):
        return (v or "").strip()

    @field_validator('timeout', 'install_timeout', 'max_workers')
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    def model_post_init(self, __context):
        """Ensure log directory exists and is resolved to absolute path."""
        self.log_dir = self.log_dir.resolve()
        self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def sudo_prefix(self) -> List[str]:
        """The elevation command as an argv prefix (empty when unset)."""
        return self.sudo.split()


def resolve_config(
    log_dir: Optional[Path] = None,
    verbose: bool = False,
    sudo: Optional[str] = None,
    prefer: Optional[List[str]] = None,
    env: Optional[EnvSettings] = None,
    file_cfg: Optional[dict[str, Any]] = None,
) -> AppConfig:
    """
    Merge configuration sources: CLI values > environment > config file > defaults.
    """
    if file_cfg is None:
        file_cfg = load_config_file()
    if env is None:
        env = EnvSettings()

    values: dict[str, Any] = dict(file_cfg)
    if env.sudo is not None:
        values["sudo"] = env.sudo
    if env.timeout is not None:
        values["timeout"] = env.timeout
    if env.verbose is not None:
        values["verbose"] = env.verbose

    if log_dir is not None:
        values["log_dir"] = log_dir
    if verbose:
        values["verbose"] = True
    if sudo is not None:
        values["sudo"] = sudo
    if prefer:
        values["prefer"] = list(prefer)

    return AppConfig(**values)
