# === FILE: link_audit/config.py ===
"""
Модуль для загрузки и валидации конфигурации аудита ссылок LinkAudit.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import urlsplit

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class Credential(BaseModel):
    """Данные авторизации для одного origin (Basic-Auth и/или cookies)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    username: Optional[str] = None
    password: Optional[str] = None
    cookies: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_pair(self) -> Credential:
        if (self.username is None) != (self.password is None):
            raise ValueError("username and password must be given together")
        return self


class AuditConfig(BaseModel):
    """Конфигурация для одного запуска аудита."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    request_delay: float = Field(1.0, ge=0, description="Пауза перед каждым запросом (секунд).")
    cache_ttl: float = Field(60.0, gt=0, description="Время жизни кэша статус/заголовок (секунд).")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("LinkAuditBot/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(0, ge=0, description="Число повторных попыток при 5xx/429.")
    credentials: Dict[str, Credential] = Field(
        default_factory=dict, description="Авторизация по origin (scheme://host)."
    )

    @field_validator("credentials", mode="before")
    def _normalize_origins(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        normalized = {}
        for origin, cred in v.items():
            parts = urlsplit(str(origin))
            if not parts.scheme or not parts.netloc:
                raise ValueError(f"credentials key must be an origin URL, got {origin!r}")
            normalized[f"{parts.scheme.lower()}://{parts.netloc.lower()}"] = cred
        return normalized


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.
    Без пути берёт configs/default.yaml, а если его нет — значения по умолчанию.
    Явно указанный, но отсутствующий файл даёт FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return AuditConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return AuditConfig(**data)


__all__ = ["AuditConfig", "Credential", "load_config"]
