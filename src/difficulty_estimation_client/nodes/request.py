from typing import Callable

from ..errors import EstimationFailure, TransportFailure
from ..state import SubmissionState
from ..tools import Transport
from ._utils import record_node_trace


def make_request_node(transport: Transport) -> Callable[[SubmissionState], SubmissionState]:
    """注入された送信関数で 1 回だけ送信するノードを作る。

    振る舞い:
    - `payload` を送信し、応答を `raw_response` に格納する（形の検証はしない）
    - 送信関数の例外は例外のまま外に出さず `failure` に格納する
      （EstimationFailure 以外は TransportFailure に包む）
    - トレースに "request" を追加

    Args:
    - transport: `payload` を受け取り JSON デコード済みの応答を返す関数。

    Returns:
    - Callable: LangGraph に登録するノード関数。
    """

    def request_node(state: SubmissionState) -> SubmissionState:
        record_node_trace(state, "request")
        state["failure"] = None
        try:
            state["raw_response"] = transport(state["payload"])
        except EstimationFailure as e:
            state["failure"] = e
        except Exception as e:
            state["failure"] = TransportFailure(str(e), details=e)

        failure = state["failure"]
        if failure is None:
            print("[node] request: 応答を受信")
        else:
            print(f"[node] request: 送信失敗 kind={failure.kind} message={failure.message!r}")
        return state

    return request_node


__all__ = ["make_request_node"]
