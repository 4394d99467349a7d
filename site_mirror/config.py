# === FILE: site_mirror/config.py ===
"""
Модуль для загрузки и валидации конфигурации зеркалирующего краулера SiteMirror.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

__all__ = ["CrawlerConfig", "load_config", "DEFAULT_CONFIG_PATH"]


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    seed_url: HttpUrl = Field(
        "https://nearceleb.com", description="Стартовый URL обхода (сохраняется в корень зеркала)."
    )
    target_host: Optional[str] = Field(
        None, description="Хост, которым ограничен обход. По умолчанию хост seed_url."
    )
    output_dir: Path = Field(Path("static"), description="Корневая папка зеркала.")
    concurrency: int = Field(16, ge=1, description="Размер пула воркеров на одну итерацию.")
    timeout: Optional[float] = Field(
        None, gt=0, description="Общий таймаут запроса (секунд). None: значение aiohttp."
    )
    user_agent: str = Field("SiteMirror/1.0", min_length=1, description="Заголовок User-Agent.")

    @field_validator("target_host", mode="before")
    def _normalize_host(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @property
    def seed(self) -> str:
        return str(self.seed_url)

    @property
    def scheme(self) -> str:
        return self.seed_url.scheme

    @property
    def host(self) -> str:
        """Хост (с портом, если он указан в seed_url), которым ограничен обход."""
        if self.target_host:
            return self.target_host
        return urlparse(self.seed).netloc.lower()


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Если путь не задан, берётся configs/default.yaml, а при его отсутствии
    встроенные значения по умолчанию. Явно указанный, но отсутствующий файл
    приводит к FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return CrawlerConfig()
        path_obj = DEFAULT_CONFIG_PATH
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

    try:
        return CrawlerConfig(**data)
    except ValidationError:
        raise
