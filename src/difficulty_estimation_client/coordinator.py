"""推定リクエストのワークフローを管理する Coordinator。

状態遷移:
- Idle --submit--> Pending --resolved--> Success
- Pending --failed--> Failed
- Success | Failed --submit--> Pending（直前の結果/エラーは破棄）

Pending を抜けるのは、自身が発行した 1 回の送信の解決か失敗だけです。
Pending 中の submit は何もしません（送信中は常に高々 1 件）。
"""

from typing import Any, Callable, List, Optional

from .config import ClientConfig
from .errors import EmptyExperienceError, MalformedResponse, TransportFailure, failure_message
from .graph import compile_apps
from .state import Failed, Idle, Pending, SubmissionState, Success, WorkflowState
from .tools import Transport, make_transport

Listener = Callable[[WorkflowState], None]


class RequestCoordinator:
    """1 つの入力を 1 回の送信に変換し、その結果を `WorkflowState` に反映する。

    Args:
        config: 起動時に解決済みの接続設定。
        transport: 送信関数（省略時は `config` で HTTP 送信する既定の関数）。
            テストではモックを注入する。
    """

    def __init__(self, config: ClientConfig, transport: Optional[Transport] = None) -> None:
        self._config = config
        self._request_app, self._resolution_app = compile_apps(transport or make_transport(config))
        self._state: WorkflowState = Idle()
        self._listeners: List[Listener] = []
        self.last_trace: List[str] = []

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return isinstance(self._state, Pending)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """状態遷移ごとに呼ばれるリスナーを登録し、登録解除関数を返す。"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, new_state: WorkflowState) -> None:
        print(f"[coordinator] {self._state.kind} -> {new_state.kind}")
        self._state = new_state
        # リスナーの失敗で遷移を巻き戻さない（Pending に取り残さない）
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception as e:
                print(f"[coordinator] listener failed on {new_state.kind}: {e!r}")

    def submit(self, text: str) -> None:
        """入力テキストを送信する。

        振る舞い:
        - Pending 中なら何もしない（2 件目の同時送信を作らない）
        - trim 後に空なら EmptyExperienceError（黙って無視しない）
        - 直ちに Pending へ遷移してから、送信グラフで 1 回だけ送信する
        - 完了は `on_call_resolved` / `on_call_failed` に振り分ける

        Args:
        - text: 利用者が入力した経験のテキスト。

        Raises:
        - EmptyExperienceError: 入力が空、または空白のみの場合。
        """
        if self.is_pending:
            print("[coordinator] submit ignored: request already in flight")
            return
        experience = (text or "").strip()
        if not experience:
            raise EmptyExperienceError("경험을 입력하세요")

        self._transition(Pending(experience=experience))

        initial_state: SubmissionState = {
            "experience": experience,
            "request_field": self._config.request_field,
            "trace": [],
        }
        try:
            sent = self._request_app.invoke(initial_state)
        except Exception as e:
            print(f"[coordinator] request graph failed: {e!r}")
            self.on_call_failed(TransportFailure(str(e), details=e))
            return
        self.last_trace = list(sent.get("trace", []))

        failure = sent.get("failure")
        if failure is not None:
            self.on_call_failed(failure)
        else:
            self.on_call_resolved(sent.get("raw_response"))

    def on_call_resolved(self, raw: Any) -> None:
        """応答を正規化し、Success か Failed に遷移する。Pending 以外では無視する。"""
        if not self.is_pending:
            print(f"[coordinator] resolution ignored in state={self._state.kind}")
            return

        try:
            resolved = self._resolution_app.invoke({"raw_response": raw, "trace": []})
        except Exception as e:
            print(f"[coordinator] resolution graph failed: {e!r}")
            self.on_call_failed(MalformedResponse(details=repr(e)))
            return
        self.last_trace = self.last_trace + list(resolved.get("trace", []))

        result = resolved.get("result")
        if result is not None:
            self._transition(Success(result=result, view=resolved.get("presentation_payload")))
        else:
            failure = resolved.get("failure")
            self._transition(Failed(message=failure_message(failure), failure=failure))

    def on_call_failed(self, cause: Any) -> None:
        """送信失敗を Failed に反映する。Pending 以外では無視する。

        メッセージは原因が持つ人間可読な文言を優先し、無ければ固定の代替文言にする。
        """
        if not self.is_pending:
            print(f"[coordinator] failure ignored in state={self._state.kind}")
            return
        failed = cause if isinstance(cause, BaseException) else None
        self._transition(Failed(message=failure_message(cause), failure=failed))


__all__ = ["Listener", "RequestCoordinator"]
