import pytest

from bid_tracker.bid import BidOrigin, BidStatus
from bid_tracker.config import Settings
from bid_tracker.errors import DuplicateBidError, NotFoundError, ValidationError
from bid_tracker.models import ResumeMetadata
from bid_tracker.repositories import InMemoryResumeRepository
from bid_tracker.skills import LayeredSkills
from bid_tracker.workflows import CreateBidRequest, CreateBidWorkflow


def _request(**overrides):
    fields = dict(
        link="https://example.com/job/123",
        company="TechCorp",
        client="ClientCo",
        role="Software Engineer",
        main_stacks=["TypeScript", "React"],
        job_description_path="TechCorp_Software_Engineer/JD.txt",
        resume_path="TechCorp_Software_Engineer/resume.pdf",
    )
    fields.update(overrides)
    return CreateBidRequest(**fields)


@pytest.fixture
def workflow(bid_repo, duplication_policy, history):
    return CreateBidWorkflow(bid_repo, duplication_policy, history)


def test_creates_and_saves_bid(workflow, bid_repo):
    response = workflow.execute(_request())

    saved = bid_repo.find_by_id(response.bid_id)
    assert saved is not None
    assert saved.status == BidStatus.NEW
    assert saved.origin == BidOrigin.BID
    assert saved.main_stacks == ["TypeScript", "React"]
    assert response.warnings == []
    assert response.company_warning is None


def test_duplicate_is_refused_and_not_saved(workflow, bid_repo):
    first = workflow.execute(_request())

    with pytest.raises(DuplicateBidError) as exc:
        workflow.execute(_request())

    assert len(bid_repo) == 1
    assert {w.type for w in exc.value.warnings} == {"LINK_MATCH", "COMPANY_ROLE_MATCH"}
    assert all(w.existing_bid_id == first.bid_id for w in exc.value.warnings)
    assert str(exc.value).startswith("Duplicate bid detected: ")


def test_same_link_other_role_is_still_a_duplicate(workflow, bid_repo):
    workflow.execute(_request())
    with pytest.raises(DuplicateBidError):
        workflow.execute(_request(role="Data Engineer"))
    assert len(bid_repo) == 1


def test_company_warning_is_attached(workflow, bid_repo, history):
    history.record_failure("TechCorp", "Software Engineer", "Bob", ["Sue"], "i-1")

    response = workflow.execute(_request())

    assert response.company_warning.startswith("Warning: 1 previous interview failure at TechCorp")
    assert bid_repo.find_by_id(response.bid_id).bid_detail == response.company_warning


@pytest.mark.parametrize("field", ["link", "company", "client", "role", "job_description_path"])
def test_missing_required_field(workflow, bid_repo, field):
    with pytest.raises(ValidationError, match=f"Missing required field: {field}"):
        workflow.execute(_request(**{field: ""}))
    assert len(bid_repo) == 0


def test_empty_stack_list_is_rejected(workflow):
    with pytest.raises(ValidationError):
        workflow.execute(_request(main_stacks=[]))
    with pytest.raises(ValidationError):
        workflow.execute(_request(main_stacks=None))


def test_layered_stacks(workflow, bid_repo):
    layers = {
        "frontend": [{"skill": "React", "weight": 0.6}, {"skill": "CSS", "weight": 0.4}],
        "backend": [{"skill": "Python", "weight": 1.0}],
    }

    response = workflow.execute(_request(main_stacks=layers))

    bid = bid_repo.find_by_id(response.bid_id)
    assert isinstance(bid.skills, LayeredSkills)
    assert bid.main_stacks == ["React", "CSS", "Python"]


def test_layered_stacks_must_sum_to_one(workflow, bid_repo):
    layers = {"backend": [{"skill": "Python", "weight": 0.5}, {"skill": "Go", "weight": 0.3}]}
    with pytest.raises(ValidationError, match="backend"):
        workflow.execute(_request(main_stacks=layers))
    assert len(bid_repo) == 0


def test_unknown_layer_is_rejected(workflow):
    with pytest.raises(ValidationError, match="Unknown skill layers"):
        workflow.execute(_request(main_stacks={"mobile": [{"skill": "Swift", "weight": 1.0}]}))


def test_explicit_layer_weights(workflow, bid_repo):
    weights = dict(frontend=0.5, backend=0.5, database=0, cloud=0, devops=0, others=0)
    response = workflow.execute(_request(layer_weights=weights))
    assert bid_repo.find_by_id(response.bid_id).layer_weights.frontend == 0.5

    with pytest.raises(ValidationError, match="must sum to 1.0"):
        workflow.execute(_request(link="https://x", role="Other", layer_weights=dict(weights, cloud=0.2)))

    with pytest.raises(ValidationError, match="missing"):
        workflow.execute(_request(link="https://y", role="Other", layer_weights={"frontend": 1.0}))


def test_linkedin_origin_needs_recruiter(workflow, bid_repo):
    with pytest.raises(ValidationError, match="Recruiter"):
        workflow.execute(_request(origin="LINKEDIN"))

    response = workflow.execute(_request(origin="linkedin", recruiter="Jane"))
    bid = bid_repo.find_by_id(response.bid_id)
    assert bid.origin == BidOrigin.LINKEDIN
    assert bid.recruiter == "Jane"


def test_unknown_origin(workflow):
    with pytest.raises(ValidationError, match="origin"):
        workflow.execute(_request(origin="EMAIL"))


def test_resume_path_or_id_but_not_both(workflow):
    with pytest.raises(ValidationError, match="not both"):
        workflow.execute(_request(resume_id="r-1"))
    with pytest.raises(ValidationError, match="resume_path or resume_id"):
        workflow.execute(_request(resume_path=None))


def _resume_workflow(bid_repo, duplication_policy, history, existing_paths=None):
    resumes = InMemoryResumeRepository(
        [ResumeMetadata(id="r-1", file_path="resumes/ts_v2.pdf")],
        existing_paths=existing_paths,
    )
    return CreateBidWorkflow(bid_repo, duplication_policy, history, resume_repository=resumes)


def test_resume_id_is_resolved_to_path(bid_repo, duplication_policy, history):
    workflow = _resume_workflow(bid_repo, duplication_policy, history)

    response = workflow.execute(_request(resume_path=None, resume_id="r-1"))

    assert bid_repo.find_by_id(response.bid_id).resume_path == "resumes/ts_v2.pdf"


def test_unknown_resume_id(bid_repo, duplication_policy, history):
    workflow = _resume_workflow(bid_repo, duplication_policy, history)
    with pytest.raises(NotFoundError, match="Resume with ID r-404 not found"):
        workflow.execute(_request(resume_path=None, resume_id="r-404"))


def test_resume_file_gone(bid_repo, duplication_policy, history):
    workflow = _resume_workflow(bid_repo, duplication_policy, history, existing_paths=[])
    with pytest.raises(ValidationError, match="no longer exists"):
        workflow.execute(_request(resume_path=None, resume_id="r-1"))
    assert len(bid_repo) == 0


def test_resume_id_without_repository(workflow):
    with pytest.raises(ValidationError, match="resume repository"):
        workflow.execute(_request(resume_path=None, resume_id="r-1"))


def test_bids_created_under_configured_tolerance_reload(bid_repo, duplication_policy, history):
    workflow = CreateBidWorkflow(
        bid_repo, duplication_policy, history, settings=Settings(weight_tolerance=0.01)
    )
    weights = dict(frontend=0.205, backend=0.30, database=0.15, cloud=0.10, devops=0.15, others=0.10)

    first = workflow.execute(_request(layer_weights=weights))

    assert bid_repo.find_by_id(first.bid_id).layer_weights.frontend == 0.205
    second = workflow.execute(_request(link="https://example.com/job/456", role="Data Engineer"))
    assert len(bid_repo) == 2
    assert second.bid_id != first.bid_id
