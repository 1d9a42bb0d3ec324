from langgraph.graph import StateGraph, START, END

from .state import SubmissionState
from .tools import Transport
from .nodes import (
    ingestion,
    normalizer,
    presentation,
    request,
)


def _normalized_router(state: SubmissionState):
    """normalizer の結果から次の遷移先を返すルータ。

    振る舞い:
    - `state["result"]` があれば "OK"、無ければ（`failure` が設定されていれば）"ERR" を返す。
    - ルーティング結果をログに出力する。

    Args:
    - state: 解決グラフの共有状態。

    Returns:
    - str: 遷移ラベル（"OK" | "ERR"）。
    """
    route = "OK" if state.get("result") is not None else "ERR"
    print(f"[router] normalizer -> {route}")
    return route


def build_request_graph(transport: Transport) -> StateGraph:
    """送信側のグラフを構築する。

    振る舞い:
    - ノード登録: ingestion → request
    - request ノードには注入された `transport` を束縛する（送信はこのノードだけで 1 回）

    Args:
    - transport: `payload` を受け取り応答を返す送信関数。

    Returns:
    - StateGraph: 構築済みの状態グラフ（未コンパイル）
    """
    g = StateGraph(SubmissionState)

    g.add_node("ingestion", ingestion.ingestion_node)
    g.add_node("request", request.make_request_node(transport))

    g.add_edge(START, "ingestion")
    g.add_edge("ingestion", "request")
    g.add_edge("request", END)

    return g


def build_resolution_graph() -> StateGraph:
    """応答の解決側のグラフを構築する。

    振る舞い:
    - ノード登録: normalizer → (presentation?)
    - 条件分岐: `_normalized_router` が "OK" なら presentation、"ERR" なら終端へ
      （失敗時はチャート/表を作らない）

    Returns:
    - StateGraph: 構築済みの状態グラフ（未コンパイル）
    """
    g = StateGraph(SubmissionState)

    g.add_node("normalizer", normalizer.normalizer_node)
    g.add_node("presentation", presentation.presentation_node)

    g.add_edge(START, "normalizer")
    g.add_conditional_edges(
        "normalizer",
        _normalized_router,
        {
            "OK": "presentation",
            "ERR": END,
        },
    )
    g.add_edge("presentation", END)

    return g


def compile_apps(transport: Transport, checkpointer=None):
    """2 つのグラフをコンパイルし、(送信アプリ, 解決アプリ) を返す。

    Args:
    - transport: 送信関数。
    - checkpointer: LangGraph 互換のチェックポインタ（省略可。状態は永続化しない前提）

    Returns:
    - tuple: コンパイル済みの (request_app, resolution_app)
    """
    request_app = build_request_graph(transport).compile(checkpointer=checkpointer)
    resolution_app = build_resolution_graph().compile(checkpointer=checkpointer)
    return request_app, resolution_app


__all__ = ["build_request_graph", "build_resolution_graph", "compile_apps"]
