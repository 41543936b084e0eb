from bid_tracker.history import CompanyHistory


def test_empty_history():
    history = CompanyHistory()
    assert history.has_failures("Acme", "Eng") is False
    assert history.get_history("Acme", "Eng") is None
    assert history.get_all_recruiters("Acme", "Eng") == []
    assert history.get_all_attendees("Acme", "Eng") == []
    assert history.get_warning_message("Acme", "Eng") == ""


def test_lookup_is_case_insensitive(history):
    history.record_failure("Acme", "Eng", "Bob", ["Sue"], "i-1")

    record = history.get_history("ACME", "eng")
    assert record is not None
    assert record.company == "Acme"
    assert [f.interview_id for f in record.failures] == ["i-1"]
    assert history.has_failures("acme", "ENG")


def test_company_and_role_are_independent_keys(history):
    history.record_failure("Acme", "Eng", "Bob", ["Sue"], "i-1")
    assert history.has_failures("Acme", "Designer") is False
    assert history.has_failures("Other", "Eng") is False


def test_failures_accumulate_across_case_variants(history):
    history.record_failure("Acme", "Eng", "Bob", ["Sue", "Tom"], "i-1")
    history.record_failure("ACME", "ENG", "Ann", ["Tom", "Eve"], "i-2")
    history.record_failure("acme", "eng", "Bob", [], "i-3")

    assert len(history.get_history("Acme", "Eng").failures) == 3
    assert sorted(history.get_all_recruiters("Acme", "Eng")) == ["Ann", "Bob"]
    assert sorted(history.get_all_attendees("Acme", "Eng")) == ["Eve", "Sue", "Tom"]


def test_get_history_returns_deep_copy(history):
    history.record_failure("Acme", "Eng", "Bob", ["Sue"], "i-1")

    copy = history.get_history("Acme", "Eng")
    copy.failures[0].attendees.append("Mallory")
    copy.failures.clear()

    again = history.get_history("Acme", "Eng")
    assert len(again.failures) == 1
    assert again.failures[0].attendees == ["Sue"]


def test_recorded_attendees_are_copied(history):
    attendees = ["Sue"]
    history.record_failure("Acme", "Eng", "Bob", attendees, "i-1")
    attendees.append("Tom")
    assert history.get_all_attendees("Acme", "Eng") == ["Sue"]


def test_warning_message_singular(history):
    history.record_failure("Acme", "Eng", "Bob", ["Sue", "Tom"], "i-1")
    assert history.get_warning_message("Acme", "Eng") == (
        "Warning: 1 previous interview failure at Acme for Eng. "
        "Previous recruiters: Bob. Previous attendees: Sue, Tom."
    )


def test_warning_message_plural(history):
    history.record_failure("Acme", "Eng", "Bob", ["Sue"], "i-1")
    history.record_failure("Acme", "Eng", "Ann", ["Sue"], "i-2")

    message = history.get_warning_message("acme", "eng")
    assert "2 previous interview failures" in message
    assert "Bob" in message and "Ann" in message


def test_records_round_trip(history):
    history.record_failure("Acme", "Eng", "Bob", ["Sue"], "i-1")
    history.record_failure("Globex", "Ops", "Ann", [], "i-2")

    restored = CompanyHistory.from_records(history.to_records())

    assert len(restored) == 2
    assert restored.get_history("ACME", "ENG") == history.get_history("Acme", "Eng")
    assert restored.get_all_recruiters("globex", "ops") == ["Ann"]
