"""
EvaluatorConfig — конфигурация интерактивного калькулятора

Immutable Pydantic модель. Значения по умолчанию соответствуют
интерактивному режиму; CLI-флаги переопределяют отдельные поля.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EvaluatorConfig(BaseModel):
    """Параметры RPN калькулятора."""

    # Интерфейс
    prompt: str = Field("> ", description="Приглашение перед чтением строки")
    show_banner: bool = Field(True, description="Печатать приветствие при старте")
    echo_results: bool = Field(True, description="Печатать результат каждой строки")

    # Ограничения ввода
    max_line_length: int = Field(
        10_000, gt=0, description="Максимальная длина строки выражения (символы)"
    )

    # Логирование
    log_level: str = Field("WARNING", description="Уровень логирования")
    log_format: Literal["json", "text"] = Field("json", description="Формат логов")

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {v!r}")
        return level
