"""サーバ応答の正規化。

未検証の応答（dict）を `EstimationResult` に変換し、結果を `Ok | Err` で明示的に返します。
呼び出し側が任意フィールド `error` の確認を忘れる余地を残さないため、ドメイン失敗も `Err` です。
"""

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from .errors import DomainFailure, EstimationFailure, MalformedResponse
from .models import EstimationResult, NumericLevelResponse, StringLevelResponse

VariantTag = Literal["numeric_level", "string_level", "canonical"]

_VARIANT_MODELS: dict[str, type[BaseModel]] = {
    "numeric_level": NumericLevelResponse,
    "string_level": StringLevelResponse,
    "canonical": EstimationResult,
}


@dataclass(frozen=True)
class Ok:
    value: EstimationResult


@dataclass(frozen=True)
class Err:
    reason: EstimationFailure


NormalizationOutcome = Union[Ok, Err]


def _domain_error(raw: Mapping[str, Any]) -> Optional[str]:
    """空でない文字列の `error` があれば返す（空白のみでも失敗扱い）。それ以外の型/空文字は無視する。"""
    error = raw.get("error")
    if isinstance(error, str) and len(error) > 0:
        return error.strip()
    return None


def classify_response(raw: Mapping[str, Any]) -> Optional[VariantTag]:
    """応答の変種タグを判定する。

    振る舞い:
    - `scores` を持ち `difficulty_scores` を持たない → "canonical"（正規化済み）
    - `level` が数値（bool を除く） → "numeric_level"
    - `level` が文字列 → "string_level"
    - いずれでもなければ None（未知の形）
    """
    if "scores" in raw and "difficulty_scores" not in raw:
        return "canonical"
    level = raw.get("level")
    if isinstance(level, bool):
        return None
    if isinstance(level, (int, float)):
        return "numeric_level"
    if isinstance(level, str):
        return "string_level"
    return None


def normalize_response(raw: Any) -> NormalizationOutcome:
    """未検証の応答を正規化する。

    振る舞い:
    - `EstimationResult` インスタンスはそのまま `Ok` で返す（冪等）。
    - dict 以外は MalformedResponse。
    - 空でない文字列の `error` があれば DomainFailure（結果は描画しない）。
    - 変種タグで検証モデルを選び、必須フィールド（experience / difficulty_scores 10件 /
      total_difficulty / similarity）と level を検証・変換する。
    - 検証エラーは MalformedResponse（details に pydantic のエラー一覧）。

    Args:
    - raw: サーバから受け取った JSON デコード済みの値。

    Returns:
    - NormalizationOutcome: `Ok(EstimationResult)` または `Err(EstimationFailure)`。
    """
    if isinstance(raw, EstimationResult):
        return Ok(raw)
    if not isinstance(raw, Mapping):
        return Err(MalformedResponse(details=f"object ではありません: {type(raw).__name__}"))

    error = _domain_error(raw)
    if error is not None:
        return Err(DomainFailure(error))

    tag = classify_response(raw)
    if tag is None:
        return Err(MalformedResponse(details="未知の応答形式（level/scores を判別できません）"))

    model = _VARIANT_MODELS[tag]
    try:
        parsed = model.model_validate(dict(raw))
    except ValidationError as e:
        return Err(MalformedResponse(details=e.errors(include_url=False)))

    if isinstance(parsed, EstimationResult):
        return Ok(parsed)
    try:
        return Ok(parsed.to_result())
    except ValidationError as e:
        return Err(MalformedResponse(details=e.errors(include_url=False)))
    except ValueError as e:
        # level の表示用変換に失敗
        return Err(MalformedResponse(details=str(e)))


__all__ = [
    "VariantTag",
    "Ok",
    "Err",
    "NormalizationOutcome",
    "classify_response",
    "normalize_response",
]
