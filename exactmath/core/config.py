"""
PrecisionConfig — Параметры итерационных вычислителей

Запасы точности (precision margin) и пороги range reduction, используемые
функциями pow/root/exp/ln. Значения по умолчанию воспроизводят
эталонное поведение; изменение запасов меняет численные результаты
в последнем знаке, поэтому модель неизменяемая и передаётся явно.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Запасы точности неотрицательные
2. Порог range reduction для ln строго больше 1
3. max_iterations=None означает отсутствие лимита итераций
"""

from typing import Final

from pydantic import BaseModel, Field

# =============================================================================
# ЗНАЧЕНИЯ ПО УМОЛЧАНИЮ
# =============================================================================

# Запас точности для pow/root/ln (дополнительные дробные разряды)
DEFAULT_MARGIN: Final[int] = 3

# Запас точности для exp (ряд + возведение в степень накапливают больше ошибки)
DEFAULT_EXP_MARGIN: Final[int] = 6

# Аргументы ln не меньше порога сводятся через корень степени magnitude(x)
DEFAULT_LN_REDUCTION_THRESHOLD: Final[int] = 1000


# =============================================================================
# CONFIG MODEL
# =============================================================================


class PrecisionConfig(BaseModel):
    """
    Конфигурация точности для функций произвольной точности.

    Immutable модель (frozen=True): конфигурация разделяется между потоками.
    """

    root_margin: int = Field(DEFAULT_MARGIN, ge=0, description="Запас разрядов для root")
    pow_margin: int = Field(DEFAULT_MARGIN, ge=0, description="Запас разрядов для pow")
    ln_margin: int = Field(DEFAULT_MARGIN, ge=0, description="Запас разрядов для ln")
    exp_margin: int = Field(DEFAULT_EXP_MARGIN, ge=0, description="Запас разрядов для exp")
    series_margin: int = Field(
        DEFAULT_MARGIN, ge=0, description="Разряды для оценки очередного члена ряда"
    )
    ln_reduction_threshold: int = Field(
        DEFAULT_LN_REDUCTION_THRESHOLD,
        gt=1,
        description="Начиная с этого значения ln использует ln(x) = m·ln(x^(1/m))",
    )
    max_iterations: int | None = Field(
        None, gt=0, description="Лимит итераций вычислителей (None — без лимита)"
    )

    model_config = {"frozen": True}  # Immutable


DEFAULT_PRECISION: Final[PrecisionConfig] = PrecisionConfig()


def resolve_config(config: PrecisionConfig | None) -> PrecisionConfig:
    """Конфигурация вызова или DEFAULT_PRECISION."""
    return DEFAULT_PRECISION if config is None else config
