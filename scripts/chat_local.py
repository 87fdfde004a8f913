#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no WhatsApp).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable session key for the conversation
- Sends your typed messages through the same HandleIncomingMessageUseCase
- Prints the state transition and the reply text
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.domain.entities.message import Message  # noqa: E402
from app.wiring.dependencies import get_handle_incoming_message_use_case  # noqa: E402


def _print_header(session_key: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"session_key: {session_key}")
    print("Type your message and press Enter ('oi' or 'menu' resets).")
    print("Commands: /new (new session), /quit, /help")
    print("-" * 60)


def main() -> None:
    session_key = os.getenv("CHAT_SESSION_KEY", "local_user_1")
    use_case = get_handle_incoming_message_use_case()
    _print_header(session_key)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /new  -> start a new session key")
            print("  /quit -> exit")
            continue
        if cmd == "/new":
            session_key = f"local_user_{int(time.time())}"
            print(f"New session_key: {session_key}")
            continue

        message = Message(
            id=f"local_{int(time.time() * 1000)}",
            session_key=session_key,
            text=user_text,
            timestamp=int(time.time()),
            platform="local",
        )

        try:
            result = use_case.handle(message)
        except Exception as e:
            print(f"ERROR: {e}")
            continue

        if result.intents:
            use_case.dispatch(result.intents)

        print("\n--- Turn ---")
        print(f"state: {result.state.value if result.state else '-'}")
        if result.intents:
            print(f"intents: {', '.join(type(i).__name__ for i in result.intents)}")
        if result.error:
            print(f"error: {result.error}")

        print("\n--- Reply ---")
        print(result.reply.strip() or "(empty reply)")
        print("-" * 60)


if __name__ == "__main__":
    main()
