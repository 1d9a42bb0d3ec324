"""難易度推定ワークフローの失敗分類。

- TransportFailure: 通信/HTTP レベルの失敗（ネットワーク、タイムアウト、5xx など）
- DomainFailure: サーバが `error` フィールドで明示的に返した失敗
- MalformedResponse: 応答スキーマ違反

いずれも Coordinator 内で回収され、`failure_message` で単一の表示用メッセージに変換されます。
"""

from typing import Any

# 原因にメッセージが無い場合に表示する固定文言
FALLBACK_MESSAGE = "난이도 측정 중 알 수 없는 오류가 발생했습니다."
MALFORMED_MESSAGE = "서버 응답 형식이 올바르지 않습니다."


class EstimationFailure(Exception):
    """推定ワークフローで回収される失敗の基底クラス。"""

    kind = "estimation"

    def __init__(self, message: str = "", *, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class TransportFailure(EstimationFailure):
    kind = "transport"

    def __init__(self, message: str = "", *, status: int | None = None, details: Any = None) -> None:
        super().__init__(message, details=details)
        self.status = status


class DomainFailure(EstimationFailure):
    kind = "domain"


class MalformedResponse(EstimationFailure):
    kind = "malformed"

    def __init__(self, message: str = MALFORMED_MESSAGE, *, details: Any = None) -> None:
        super().__init__(message, details=details)


class EmptyExperienceError(ValueError):
    """空（空白のみを含む）の入力で submit された。"""


def failure_message(cause: Any) -> str:
    """失敗原因から利用者に表示するメッセージを選ぶ。

    振る舞い:
    - 原因が人間可読なメッセージを持っていればそれを返す。
    - メッセージが無い/空の場合（None や message の無い例外など）は `FALLBACK_MESSAGE` を返す。

    Args:
    - cause: 例外インスタンス、文字列、または None。

    Returns:
    - str: 空にならない表示用メッセージ。
    """
    if isinstance(cause, EstimationFailure):
        text = cause.message
    elif isinstance(cause, BaseException):
        text = str(cause)
    elif isinstance(cause, str):
        text = cause
    else:
        text = ""
    text = (text or "").strip()
    return text or FALLBACK_MESSAGE


__all__ = [
    "FALLBACK_MESSAGE",
    "MALFORMED_MESSAGE",
    "EstimationFailure",
    "TransportFailure",
    "DomainFailure",
    "MalformedResponse",
    "EmptyExperienceError",
    "failure_message",
]
