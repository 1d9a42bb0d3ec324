"""接続先サービスの設定。

補足:
- `.env` の読み込みはエントリポイントで行い、本モジュールは環境変数を直接参照します。
- 設定は起動時に一度だけ解決し、`RequestCoordinator` に注入します（モジュール定数にしない）。

使用環境変数:
- `DIFFICULTY_API_BASE_URL`: 難易度推定サービスのベースURL（必須）
- `DIFFICULTY_API_REQUEST_FIELD`: 送信フィールド名 `text`（既定）/ `experience`（旧デプロイ）
- `DIFFICULTY_API_TIMEOUT_S`: HTTP タイムアウト秒（既定 30）
"""

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import RequestField

DEFAULT_TIMEOUT_S = 30.0


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str
    request_field: RequestField = "text"
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, v: str) -> str:
        url = v.strip().rstrip("/")
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"base_url は http(s) で始まる必要があります: {v!r}")
        return url

    @property
    def estimate_url(self) -> str:
        return f"{self.base_url}/api/estimate"


def load_config(**overrides: Any) -> ClientConfig:
    """環境変数と明示指定から `ClientConfig` を組み立てる。

    振る舞い:
    - 明示指定（None 以外）を環境変数より優先する。
    - ベースURLが未設定なら ValueError。

    Args:
    - overrides: `base_url` / `request_field` / `timeout_s` のいずれか。

    Returns:
    - ClientConfig: 検証済みの設定。
    """
    values: dict[str, Any] = {
        "base_url": os.getenv("DIFFICULTY_API_BASE_URL"),
        "request_field": os.getenv("DIFFICULTY_API_REQUEST_FIELD"),
        "timeout_s": os.getenv("DIFFICULTY_API_TIMEOUT_S"),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    if not values.get("base_url"):
        raise ValueError("DIFFICULTY_API_BASE_URL が未設定です")
    return ClientConfig(**{k: v for k, v in values.items() if v not in (None, "")})


__all__ = ["DEFAULT_TIMEOUT_S", "ClientConfig", "load_config"]
