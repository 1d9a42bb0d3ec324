"""State schema for the difficulty estimation workflow.

Notes
-----
- `SubmissionState` は 1 回の submit を処理する LangGraph の共有状態です。
  ingestion → request（送信）と normalizer → presentation（解決）の 2 つのグラフで使います。
- `WorkflowState` は Coordinator が保持する画面側の状態です。
  Idle → Pending → Success | Failed、終端からの submit で再び Pending に戻ります。
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, TypedDict, Union

from .errors import EstimationFailure
from .models import EstimationResult


class SubmissionState(TypedDict, total=False):
    experience: str  # 入力テキスト（trim 済み）
    request_field: str  # 送信フィールド名（"text" | "experience"）
    payload: Dict[str, str]  # 送信ボディ
    raw_response: Any  # サーバ応答（未検証）
    failure: Optional[EstimationFailure]  # 送信/正規化の失敗
    result: Optional[EstimationResult]  # 正規化済みの結果
    presentation_payload: Dict[str, Any]  # 表示用データ（チャート設定・表・要約）
    trace: List[str]  # 通過ノードの記録


@dataclass(frozen=True)
class Idle:
    kind: ClassVar[str] = "idle"


@dataclass(frozen=True)
class Pending:
    kind: ClassVar[str] = "pending"

    experience: str


@dataclass(frozen=True)
class Success:
    kind: ClassVar[str] = "success"

    result: EstimationResult
    view: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class Failed:
    kind: ClassVar[str] = "failed"

    message: str
    failure: Optional[BaseException] = None


WorkflowState = Union[Idle, Pending, Success, Failed]


__all__ = [
    "SubmissionState",
    "Idle",
    "Pending",
    "Success",
    "Failed",
    "WorkflowState",
]
