"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pyversions.domain.scanner import (
    PRERELEASE_SELECTOR,
    PRERELEASE_URL,
    STABLE_SELECTOR,
    STABLE_URL,
    ScanTarget,
)
from pyversions.infra.http_clients import DEFAULT_USER_AGENT


def resolve_env_file() -> Path:
    """Détermine le fichier .env à utiliser.

    Priorité:
    1) ENV_FILE (chemin explicite)
    2) .env.{APP_ENV} si présent
    3) .env (défaut)
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return Path(env_file)
    cwd = Path.cwd()
    candidate_specific = cwd / f".env.{os.getenv('APP_ENV', 'dev')}"
    if candidate_specific.exists():
        return candidate_specific
    return cwd / ".env"


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )
    APP_NAME: str = "pyversions"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    # Obligatoire: pas de valeur par défaut
    PORT: int = Field(ge=1, le=65535)
    LOG_LEVEL: str = "INFO"

    # Pages scannées
    STABLE_URL: str = STABLE_URL
    STABLE_SELECTOR: str = STABLE_SELECTOR
    PRERELEASE_URL: str = PRERELEASE_URL
    PRERELEASE_SELECTOR: str = PRERELEASE_SELECTOR
    FETCH_TIMEOUT_S: float = Field(default=10.0, gt=0)
    FETCH_USER_AGENT: str = DEFAULT_USER_AGENT

    # Rate limit (GCRA, clé = chemin de la requête)
    RATE_LIMIT_PER_MINUTE: int = Field(default=20, ge=1)
    RATE_LIMIT_BURST: int = Field(default=5, ge=0)
    RATE_LIMIT_MAX_KEYS: int = Field(default=65536, ge=1)

    @property
    def stable_target(self) -> ScanTarget:
        return ScanTarget("stable", self.STABLE_URL, self.STABLE_SELECTOR)

    @property
    def prerelease_target(self) -> ScanTarget:
        return ScanTarget("prerelease", self.PRERELEASE_URL, self.PRERELEASE_SELECTOR)


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application.

    Lève `pydantic.ValidationError` si PORT est absent ou invalide.
    """
    return Settings(_env_file=resolve_env_file())
