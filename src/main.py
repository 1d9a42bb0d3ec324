from dotenv import load_dotenv
from difficulty_estimation_client.config import load_config
from difficulty_estimation_client.coordinator import RequestCoordinator
from difficulty_estimation_client.errors import EmptyExperienceError
from difficulty_estimation_client.nodes.presentation import build_presentation, render_text
from difficulty_estimation_client.state import Failed, Success
import argparse
import sys


def main() -> int:
    # .env をエントリポイントで読み込む（環境変数の統一管理）
    load_dotenv(override=True)

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--text",
        help="難易度を測定する経験のテキスト",
        default="마라톤 완주",
    )
    parser.add_argument(
        "--base-url",
        help="難易度推定サービスのベースURL（未指定時は DIFFICULTY_API_BASE_URL）",
        default=None,
    )
    parser.add_argument(
        "--request-field",
        help="送信フィールド名",
        choices=("text", "experience"),
        default=None,
    )
    parser.add_argument(
        "--timeout",
        help="HTTP タイムアウト秒",
        type=float,
        default=None,
    )
    args = parser.parse_args()

    config = load_config(
        base_url=args.base_url,
        request_field=args.request_field,
        timeout_s=args.timeout,
    )
    coordinator = RequestCoordinator(config)

    try:
        coordinator.submit(args.text)
    except EmptyExperienceError as e:
        print(f"[main] {e}")
        return 2

    print(f"[trace] path={' -> '.join(coordinator.last_trace)}")
    state = coordinator.state
    if isinstance(state, Success):
        print(render_text(state.view or build_presentation(state.result)))
        return 0
    if isinstance(state, Failed):
        print(f"[result] {state.message}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
