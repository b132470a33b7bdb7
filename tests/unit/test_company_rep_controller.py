"""
Unit Tests for CompanyRepController

Internship authoring limits, PENDING-only edits and application decisions.
"""

from datetime import date, timedelta

import pytest

from models import (
    ApplicationStatus,
    InternshipLevel,
    InternshipStatus,
    InvalidArgumentError,
    InvalidStateError,
    Major,
    NotFoundError,
    UnauthorizedError,
)

TODAY = date.today()


@pytest.fixture
def bob(repository):
    return repository.find_company_rep("bob@acme.com")


def _create(controller, rep, **overrides):
    fields = dict(
        title="Data Intern",
        description="ETL pipelines",
        level=InternshipLevel.BASIC,
        preferred_majors=[Major.CCDS],
        open_date=TODAY,
        close_date=TODAY + timedelta(days=30),
        number_of_slots=2,
    )
    fields.update(overrides)
    return controller.create_internship(rep, **fields)


class TestCreate:
    def test_create_pending_and_visible(self, company_rep_controller, bob, repository):
        internship = _create(company_rep_controller, bob)
        assert internship.internship_id == "ACMECorp-bob-1"
        assert internship.status == InternshipStatus.PENDING
        assert internship.visible
        assert internship.company_rep_id == "bob@acme.com"
        assert bob.internships == (internship,)
        assert repository.find_internship("ACMECorp-bob-1") is internship

    def test_unapproved_rep(self, company_rep_controller, repository):
        eve = repository.find_company_rep("eve@newco.com")
        with pytest.raises(UnauthorizedError):
            _create(company_rep_controller, eve)

    def test_cap_of_five_active(self, company_rep_controller, bob):
        created = [_create(company_rep_controller, bob) for _ in range(5)]
        with pytest.raises(InvalidStateError):
            _create(company_rep_controller, bob)

        created[0].status = InternshipStatus.REJECTED
        sixth = _create(company_rep_controller, bob)
        assert sixth.internship_id == "ACMECorp-bob-6"

    def test_ids_skip_ids_in_use(self, company_rep_controller, bob):
        first = _create(company_rep_controller, bob)
        second = _create(company_rep_controller, bob)
        company_rep_controller.delete_internship(bob, first.internship_id)
        third = _create(company_rep_controller, bob)
        assert second.internship_id == "ACMECorp-bob-2"
        assert third.internship_id == "ACMECorp-bob-3"

    def test_invalid_fields(self, company_rep_controller, bob, repository):
        with pytest.raises(InvalidArgumentError):
            _create(company_rep_controller, bob, close_date=TODAY - timedelta(days=1))
        with pytest.raises(InvalidArgumentError):
            _create(company_rep_controller, bob, number_of_slots=11)
        assert bob.internships == ()
        assert repository.all_internships() == []


class TestEdit:
    def test_update_pending(self, company_rep_controller, bob):
        internship = _create(company_rep_controller, bob)
        company_rep_controller.update_internship(
            bob, internship.internship_id, title="Senior Data Intern", number_of_slots=4
        )
        assert internship.title == "Senior Data Intern"
        assert internship.number_of_slots == 4

    def test_update_after_approval_fails(self, company_rep_controller, bob):
        internship = _create(company_rep_controller, bob)
        internship.status = InternshipStatus.APPROVED
        with pytest.raises(InvalidStateError):
            company_rep_controller.update_internship(bob, internship.internship_id, title="New")
        with pytest.raises(InvalidStateError):
            company_rep_controller.add_preferred_major(bob, internship.internship_id, Major.COE)
        with pytest.raises(InvalidStateError):
            company_rep_controller.remove_preferred_major(bob, internship.internship_id, Major.CCDS)

    def test_majors(self, company_rep_controller, bob):
        internship = _create(company_rep_controller, bob)
        company_rep_controller.add_preferred_major(bob, internship.internship_id, Major.COE)
        company_rep_controller.remove_preferred_major(bob, internship.internship_id, Major.CCDS)
        assert internship.preferred_majors == (Major.COE,)

    def test_other_reps_internship_not_found(self, company_rep_controller, bob, make_internship, repository):
        repository.find_company_rep("eve@newco.com").approved = True
        foreign = make_internship(rep_id="eve@newco.com")
        with pytest.raises(NotFoundError):
            company_rep_controller.toggle_visibility(bob, foreign.internship_id)

    def test_toggle_visibility(self, company_rep_controller, bob, make_internship):
        internship = make_internship()
        assert company_rep_controller.toggle_visibility(bob, internship.internship_id) is False
        assert company_rep_controller.toggle_visibility(bob, internship.internship_id) is True


class TestDelete:
    def test_delete_withdraws_applications(
        self, company_rep_controller, student_controller, bob, repository
    ):
        internship = _create(company_rep_controller, bob, preferred_majors=[])
        student = repository.find_student("U1234567A")
        internship.status = InternshipStatus.APPROVED
        application = student_controller.apply(student, internship.internship_id)
        internship.status = InternshipStatus.PENDING

        company_rep_controller.delete_internship(bob, internship.internship_id)

        assert application.status == ApplicationStatus.UNSUCCESSFUL
        assert repository.find_internship(internship.internship_id) is None
        assert bob.internships == ()

    def test_delete_non_pending_fails(self, company_rep_controller, bob, make_internship):
        internship = make_internship()
        with pytest.raises(InvalidStateError):
            company_rep_controller.delete_internship(bob, internship.internship_id)
        assert bob.find_internship(internship.internship_id) is internship


class TestProcessApplication:
    def test_decision_does_not_touch_accepted(
        self, company_rep_controller, student_controller, bob, make_internship, repository
    ):
        internship = make_internship()
        student = repository.find_student("U1234567A")
        application = student_controller.apply(student, internship.internship_id)

        company_rep_controller.process_application(
            bob, internship.internship_id, application.application_id, ApplicationStatus.SUCCESSFUL
        )
        assert application.status == ApplicationStatus.SUCCESSFUL
        assert not application.accepted
        assert company_rep_controller.view_applications(bob, internship.internship_id) == [application]

    def test_pending_is_not_a_decision(self, company_rep_controller, bob, make_internship):
        internship = make_internship()
        with pytest.raises(InvalidArgumentError):
            company_rep_controller.process_application(
                bob, internship.internship_id, "any", ApplicationStatus.PENDING
            )

    def test_accepted_application_is_final(
        self, company_rep_controller, student_controller, bob, make_internship, repository
    ):
        internship = make_internship()
        student = repository.find_student("U1234567A")
        application = student_controller.apply(student, internship.internship_id)
        application.update_status(ApplicationStatus.SUCCESSFUL)
        student_controller.accept(student, application.application_id)

        with pytest.raises(InvalidStateError):
            company_rep_controller.process_application(
                bob, internship.internship_id, application.application_id, ApplicationStatus.UNSUCCESSFUL
            )

    def test_withdrawn_application_cannot_be_revived(
        self, company_rep_controller, student_controller, staff_controller, bob, make_internship, repository
    ):
        student = repository.find_student("U1234567A")
        internships = [make_internship() for _ in range(4)]
        first = [student_controller.apply(student, i.internship_id) for i in internships[:3]][0]
        request = student_controller.request_withdrawal(student, first.application_id)
        staff_controller.process_withdrawal(request.request_id, approve=True)
        student_controller.apply(student, internships[3].internship_id)

        with pytest.raises(InvalidStateError):
            company_rep_controller.process_application(
                bob, internships[0].internship_id, first.application_id, ApplicationStatus.SUCCESSFUL
            )
        assert first.status == ApplicationStatus.UNSUCCESSFUL
        assert student.active_application_count() == 3

    def test_decision_is_final(self, company_rep_controller, student_controller, bob, make_internship, repository):
        internship = make_internship()
        application = student_controller.apply(repository.find_student("U1234567A"), internship.internship_id)
        company_rep_controller.process_application(
            bob, internship.internship_id, application.application_id, ApplicationStatus.UNSUCCESSFUL
        )
        with pytest.raises(InvalidStateError):
            company_rep_controller.process_application(
                bob, internship.internship_id, application.application_id, ApplicationStatus.SUCCESSFUL
            )

    def test_unknown_application(self, company_rep_controller, bob, make_internship):
        internship = make_internship()
        with pytest.raises(NotFoundError):
            company_rep_controller.process_application(
                bob, internship.internship_id, "missing", ApplicationStatus.SUCCESSFUL
            )

    def test_view_internships_by_status(self, company_rep_controller, bob, make_internship):
        approved = make_internship()
        pending = make_internship(status=InternshipStatus.PENDING)
        assert company_rep_controller.view_internships(bob) == [approved, pending]
        assert company_rep_controller.view_internships(bob, InternshipStatus.PENDING) == [pending]
