"""
Unit Tests for ReportUtils
"""

import pytest

from models import InvalidArgumentError, Major
from utils.report_utils import ReportUtils


def test_format_internships(make_internship):
    internship = make_internship(majors=[Major.CCDS, Major.COE], slots=3)
    text = ReportUtils.format_internships([internship])
    assert internship.internship_id in text
    assert "0/3" in text
    assert "CCDS, COE" in text


def test_format_empty_tables():
    assert ReportUtils.format_internships([]) == "No internships found."
    assert ReportUtils.format_applications([]) == "No applications found."
    assert ReportUtils.format_withdrawals([]) == "No withdrawal requests found."
    assert ReportUtils.format_users([]) == "No users found."


def test_format_users_per_role(repository):
    text = ReportUtils.format_users(repository.all_users())
    assert "CCDS, Year 1" in text
    assert "ACME Corp (approved)" in text
    assert "NewCo (pending)" in text
    assert "Career Services" in text


def test_format_statistics(staff_controller, make_internship):
    make_internship()
    text = ReportUtils.format_statistics(staff_controller.statistics())
    assert "Students: 2" in text
    assert "Company Representatives: 2 (Approved: 1)" in text
    assert "Approved: 1" in text
    assert "Pending: 0" in text


def test_write_report(settings, repository, make_internship):
    internship = make_internship()
    staff = repository.find_user("staff01")
    utils = ReportUtils(settings['system']['reports_dir'])

    path = utils.write_report(staff, [internship], {"Major": None, "Level": "BASIC"})

    assert path.name == "internship_report.txt"
    content = path.read_text(encoding="utf-8")
    assert "Generated By: Sarah Koh (staff01)" in content
    assert "Major: All" in content
    assert "Level: BASIC" in content
    assert internship.internship_id in content
    assert "Total Internships: 1" in content


def test_write_report_rejects_paths(settings, repository):
    utils = ReportUtils(settings['system']['reports_dir'])
    with pytest.raises(InvalidArgumentError):
        utils.write_report(repository.find_user("staff01"), [], {}, "../escape.txt")
