"""Examples of using iterman as a library.

Builds the lists for a small mailing campaign and sends a few messages
through a fake mailer, recording each outcome with a write callback.
"""

import tempfile
from pathlib import Path

from iterman import BufferList, ListManager, MemoryList, Outcome, load_directory
from iterman.core.logging_config import setup_logging


def example_campaign(workdir: Path):
    """Cycle subjects and landing pages across a one-shot recipient list."""
    print("=== Campaign Example ===")

    recipients = workdir / "recipients.txt"
    recipients.write_text("test@aol.com\ntest@web.com\ntest@mail.com\n", encoding="utf-8")

    pages = workdir / "pages"
    pages.mkdir()
    (pages / "01-new.html").write_text("https://business.com/lp/new", encoding="utf-8")
    (pages / "02-best.html").write_text("https://business.com/lp/best", encoding="utf-8")

    sent_log = []

    def record(item: str, outcome: Outcome) -> None:
        sent_log.append((item, outcome.succeeded))

    with ListManager() as manager:
        manager.add_list("recipients", BufferList.from_path(recipients))
        manager.add_list(
            "subjects", MemoryList.new_round_robin(["Hi again", "Since we last spoke"])
        )
        manager.add_list("landing_pages", load_directory(pages, round_robin=True))

        def send(recipient: str) -> str:
            subject = manager.pull("subjects")
            page = manager.pull("landing_pages")
            return f"To: {recipient} | {subject} | {page}"

        while True:
            outcome = manager.consume("recipients", send, write_callback=record)
            if outcome is None:
                break
            print(outcome.result)

    print(f"Recorded {len(sent_log)} deliveries")


if __name__ == "__main__":
    setup_logging(level="INFO")
    with tempfile.TemporaryDirectory() as tmp:
        example_campaign(Path(tmp))
