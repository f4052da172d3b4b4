from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from adapters.demo_match_api import DemoMatchApi
from adapters.toasters import ConsoleToaster
from core.models import InteractionRecord, InteractionType, Toast, ToastSeverity


def test_demo_api_serves_sample_batch_and_keeps_records() -> None:
    api = DemoMatchApi(latency=0)
    record = InteractionRecord(
        initiator_id="company-1",
        target_id="2",
        type=InteractionType.SAVE,
        timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )

    async def _flow():
        candidates = await api.fetch_candidates("company-1")
        await api.record_interaction(record)
        return candidates

    candidates = asyncio.run(_flow())

    assert [c.id for c in candidates] == ["1", "2", "3"]
    assert all(c.skills for c in candidates)
    assert api.recorded == [record]


def test_console_toaster_marks_destructive(capsys) -> None:
    toaster = ConsoleToaster()
    toaster.show(Toast(title="Success", message="Candidate matches loaded."))
    toaster.show(Toast(title="Error", message="Could not load.", severity=ToastSeverity.DESTRUCTIVE))

    lines = capsys.readouterr().out.splitlines()

    assert lines == ["* Success: Candidate matches loaded.", "! Error: Could not load."]
