"""外部サービスとの連携。

提供機能:
- 難易度推定サービスへの送信: `post_estimate(config, request)`
  - `POST {base_url}/api/estimate` に JSON を送り、JSON デコード済みの応答を返す
  - 通信/HTTP/デコードの失敗はすべて `TransportFailure` として送出する
- Coordinator に注入する送信関数の生成: `make_transport(config)`

補足:
- リトライ・キャッシュは行いません（1 回の submit につき 1 回の送信）。
- タイムアウトは `ClientConfig.timeout_s` を使用します。
"""

import json
import socket
import urllib.error
import urllib.request
from typing import Any, Callable

from .config import ClientConfig
from .errors import TransportFailure

Transport = Callable[[dict[str, str]], Any]


def _decode_json(data: bytes) -> Any:
    """応答本文を JSON としてデコードする。空本文は None。"""
    text = data.decode("utf-8", errors="replace").strip()
    if not text:
        return None
    return json.loads(text)


def _http_error_message(err: urllib.error.HTTPError) -> str:
    """HTTPError から表示用メッセージを作る。

    振る舞い:
    - 本文が JSON で、文字列の `error` または `detail` を持てばそれを使う。
    - それ以外は "Request failed with status code <n>"。
    """
    try:
        body = _decode_json(err.read())
    except Exception:
        body = None
    if isinstance(body, dict):
        for key in ("error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return f"Request failed with status code {err.code}"


def post_estimate(config: ClientConfig, payload: dict[str, str]) -> Any:
    """推定リクエストを送り、JSON デコード済みの応答を返す。

    Args:
        config: 接続設定（URL・送信フィールド名・タイムアウト）。
        payload: 送信ボディ（`{"text": ...}` または `{"experience": ...}`）。

    Returns:
        Any: JSON デコード済みの応答（形の検証は normalizer 側で行う）。

    Raises:
        TransportFailure: 接続失敗・タイムアウト・HTTP エラー・JSON でない応答。
    """
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    req = urllib.request.Request(config.estimate_url, data=body, method="POST")
    req.add_header("Content-Type", "application/json")
    req.add_header("Accept", "application/json")
    try:
        with urllib.request.urlopen(req, timeout=config.timeout_s) as resp:
            data = resp.read()
    except urllib.error.HTTPError as e:
        message = _http_error_message(e)
        print(f"[tools] estimate HTTP失敗: status={e.code} message={message}")
        raise TransportFailure(message, status=e.code) from e
    except urllib.error.URLError as e:
        reason = e.reason
        if isinstance(reason, socket.timeout):
            message = "timeout exceeded"
        else:
            message = "Network Error"
        print(f"[tools] estimate 接続失敗: {reason}")
        raise TransportFailure(message, details=str(reason)) from e
    except (socket.timeout, TimeoutError) as e:
        print(f"[tools] estimate タイムアウト: {e}")
        raise TransportFailure("timeout exceeded") from e

    try:
        return _decode_json(data)
    except ValueError as e:
        print(f"[tools] estimate 応答がJSONではありません: {e}")
        raise TransportFailure("Invalid JSON response", details=str(e)) from e


def make_transport(config: ClientConfig) -> Transport:
    """設定を束縛した送信関数を返す（Coordinator への注入用）。"""

    def transport(payload: dict[str, str]) -> Any:
        return post_estimate(config, payload)

    return transport


__all__ = ["Transport", "post_estimate", "make_transport"]
