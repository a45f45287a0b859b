from __future__ import annotations

from rollcall.adapters.drafts import DraftPayload, parse_draft_payloads
from rollcall.domain.model import RejectionReason


def test_draft_payload_reads_camel_case_keys() -> None:
    payload = DraftPayload.model_validate(
        {"name": " 甲 ", "hasSignature": True, "forcedRound": 2, "code": 101, "note": None}
    )

    draft = payload.to_draft(source_hint="R2 名單")

    assert draft.name == "甲"
    assert draft.has_signature
    assert draft.forced_round == 2
    assert draft.code == "101"
    assert draft.note == ""
    assert draft.source_hint == "R2 名單"


def test_parse_draft_payloads_rejects_malformed_entries_individually() -> None:
    parsed = parse_draft_payloads(
        [
            {"name": "甲", "hasSignature": True},
            {"hasSignature": True},
            {"name": "乙", "forcedRound": 0},
            ["not", "a", "draft"],
            {"name": "丙", "category": "總會"},
        ]
    )

    assert [d.name for d in parsed.drafts] == ["甲", "丙"]
    assert [(r.reason, r.raw_name) for r in parsed.rejected] == [
        (RejectionReason.MALFORMED, ""),
        (RejectionReason.MALFORMED, "乙"),
        (RejectionReason.MALFORMED, ""),
    ]


def test_blank_names_pass_validation_for_the_normalizer() -> None:
    parsed = parse_draft_payloads([{"name": "   "}])

    assert [d.name for d in parsed.drafts] == [""]
    assert parsed.rejected == []
