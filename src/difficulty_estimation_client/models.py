"""リクエスト/レスポンスのデータモデル（Pydantic）。

Notes
-----
- サーバ応答はデプロイにより形が揺れるため、`level` の型で区別できる 2 つの変種と、
  正規化済みの形（canonical）をタグ付きで扱います。
- 正規化後の `EstimationResult.scores` は常に 10 要素で、`METRIC_LABELS` と位置で対応します。
"""

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

RequestField = Literal["text", "experience"]

# 指標ラベル（順序固定）。scores の i 番目は METRIC_LABELS[i] に対応する。
METRIC_LABELS: tuple[str, ...] = (
    "육체적 힘듦",
    "정신적 노력",
    "시간 투자",
    "기술적 복잡성",
    "사회적 도전",
    "재정적 부담",
    "위험도",
    "지속성 요구",
    "창의성 요구",
    "희소성",
)
METRIC_COUNT = len(METRIC_LABELS)


def _require_number(value: Any) -> float:
    """bool と文字列を除く有限の数値だけを float として受け付ける。"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"数値ではありません: {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError("float に収まらない数値です") from None
    if not math.isfinite(number):
        raise ValueError(f"有限の数値ではありません: {value!r}")
    return number


def _require_score_vector(value: Any) -> tuple[float, ...]:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"配列ではありません: {type(value).__name__}")
    if len(value) != METRIC_COUNT:
        raise ValueError(f"要素数が {METRIC_COUNT} ではありません: {len(value)}")
    return tuple(_require_number(v) for v in value)


def level_label(level: Any) -> str:
    """数値/文字列いずれで届いた `level` も表示用文字列に変換する。

    振る舞い:
    - 整数値（3 や 3.0）は小数部なしの "3" にする。
    - それ以外の有限小数は最短表記（2.5 → "2.5"）。
    - 文字列は前後空白を除去し、空なら不正とする。
    - bool・None・その他の型は不正（暗黙の型変換に頼らない）。

    Raises:
    - ValueError: 表示用文字列に変換できない場合。
    """
    if isinstance(level, bool):
        raise ValueError("level に bool は使えません")
    if isinstance(level, int):
        return str(level)
    if isinstance(level, float):
        if not math.isfinite(level):
            raise ValueError(f"level が有限の数値ではありません: {level!r}")
        return str(int(level)) if level.is_integer() else repr(level)
    if isinstance(level, str):
        text = level.strip()
        if not text:
            raise ValueError("level が空文字です")
        return text
    raise ValueError(f"level の型が不正です: {type(level).__name__}")


class EstimationRequest(BaseModel):
    """送信ペイロード。フィールド名はデプロイ設定（`text` / `experience`）で決まる。"""

    experience: StrictStr

    def to_payload(self, field: RequestField = "text") -> dict[str, str]:
        return {field: self.experience}


class EstimationResult(BaseModel):
    """正規化済みの推定結果（表示層が受け取る唯一の形）。

    Attributes:
        experience: 入力された経験のテキスト（サーバ応答値）。
        level: 表示用の難易度レベル。
        total_difficulty: 総合難易度。
        similarity: 類似経験との類似度（0.0〜1.0）。0 は「未計算」を意味し、表示しない。
        scores: 指標ごとのスコア（10 要素、`METRIC_LABELS` と同順）。
    """

    model_config = ConfigDict(frozen=True)

    experience: StrictStr
    level: str
    total_difficulty: float
    similarity: float = Field(ge=0.0, le=1.0)
    scores: tuple[float, ...]

    @field_validator("level", mode="before")
    @classmethod
    def check_level(cls, v: Any) -> str:
        return level_label(v)

    @field_validator("total_difficulty", "similarity", mode="before")
    @classmethod
    def check_number(cls, v: Any) -> float:
        return _require_number(v)

    @field_validator("scores", mode="before")
    @classmethod
    def check_scores(cls, v: Any) -> tuple[float, ...]:
        return _require_score_vector(v)

    @property
    def has_similarity(self) -> bool:
        return self.similarity > 0


class _RawResponseBase(BaseModel):
    """両変種に共通する必須フィールド。未知のフィールドは無視する。

    `level` の型は変種ごとに絞り込み、表示用文字列への変換は `display_level` で一度だけ行う。
    """

    experience: StrictStr
    level: Any
    total_difficulty: float
    similarity: float = Field(ge=0.0, le=1.0)
    difficulty_scores: tuple[float, ...]

    @field_validator("total_difficulty", "similarity", mode="before")
    @classmethod
    def check_number(cls, v: Any) -> float:
        return _require_number(v)

    @field_validator("difficulty_scores", mode="before")
    @classmethod
    def check_scores(cls, v: Any) -> tuple[float, ...]:
        return _require_score_vector(v)

    def display_level(self) -> str:
        return level_label(self.level)

    def to_result(self) -> EstimationResult:
        return EstimationResult(
            experience=self.experience,
            level=self.display_level(),
            total_difficulty=self.total_difficulty,
            similarity=self.similarity,
            scores=self.difficulty_scores,
        )


class NumericLevelResponse(_RawResponseBase):
    """変種A: `id` を持ち、`level` を数値で返すデプロイ。`id` は結果に使わないので型を問わない。"""

    id: Any = None
    level: float

    @field_validator("level", mode="before")
    @classmethod
    def check_level(cls, v: Any) -> float:
        return _require_number(v)


class StringLevelResponse(_RawResponseBase):
    """変種B: `level` を文字列で返し、失敗時は `error` を載せることがあるデプロイ。"""

    level: StrictStr
    error: Any = None


__all__ = [
    "RequestField",
    "METRIC_LABELS",
    "METRIC_COUNT",
    "level_label",
    "EstimationRequest",
    "EstimationResult",
    "NumericLevelResponse",
    "StringLevelResponse",
]
