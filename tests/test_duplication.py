from types import SimpleNamespace

from bid_tracker.policies import DuplicationDetectionPolicy

from factories import make_bid


def _existing(bid_id, link, company, role):
    return SimpleNamespace(id=bid_id, link=link, company=company, role=role)


def test_identical_bid_gives_two_warnings():
    policy = DuplicationDetectionPolicy()
    old = make_bid()
    new = make_bid()

    warnings = policy.check_duplication(new, [old])

    assert [w.type for w in warnings] == ["LINK_MATCH", "COMPANY_ROLE_MATCH"]
    assert all(w.existing_bid_id == old.id for w in warnings)
    assert old.id in warnings[0].message
    assert "TechCorp - Software Engineer" in warnings[1].message


def test_company_role_match_is_case_insensitive():
    policy = DuplicationDetectionPolicy()
    new = make_bid(link="https://example.com/other")
    old = _existing("bid-1", "https://example.com/job/123", "techcorp", "SOFTWARE ENGINEER")

    warnings = policy.check_duplication(new, [old])

    assert len(warnings) == 1
    assert warnings[0].type == "COMPANY_ROLE_MATCH"


def test_link_match_is_exact():
    policy = DuplicationDetectionPolicy()
    new = make_bid(link="https://example.com/JOB/123", company="Other")
    old = _existing("bid-1", "https://example.com/job/123", "TechCorp", "Software Engineer")

    assert policy.check_duplication(new, [old]) == []


def test_one_field_match_is_not_a_duplicate():
    policy = DuplicationDetectionPolicy()
    new = make_bid(link="https://example.com/new", role="Data Engineer")
    old = _existing("bid-1", "https://example.com/old", "TechCorp", "Software Engineer")

    assert policy.check_duplication(new, [old]) == []


def test_no_existing_bids():
    policy = DuplicationDetectionPolicy()
    assert policy.check_duplication(make_bid(), []) == []


def test_warnings_per_existing_bid():
    policy = DuplicationDetectionPolicy()
    new = make_bid()
    olds = [
        _existing("bid-1", new.link, "Elsewhere", "Other"),
        _existing("bid-2", "https://x", "TechCorp", "Software Engineer"),
    ]

    warnings = policy.check_duplication(new, olds)

    assert [(w.type, w.existing_bid_id) for w in warnings] == [
        ("LINK_MATCH", "bid-1"),
        ("COMPANY_ROLE_MATCH", "bid-2"),
    ]
