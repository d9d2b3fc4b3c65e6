"""Tests for the rule-based résumé parser."""

import pytest

from resume_optimizer.parser_rule import extract_personal_info, parse_resume_rule
from resume_optimizer.schema_resume import new_resume


HEADER_BLOCK = "Jane Doe\nStaff Engineer\n"


def _parse_body(text):
    """Parse `text` after a name and title, so no body line is claimed as either."""
    return parse_resume_rule(HEADER_BLOCK + text)


SCENARIO = (
    "Jane Doe\nSenior Engineer\njane@x.com\nEXPERIENCE\n"
    "Lead Engineer - Acme Corp - NYC - 2020 - Present\nBuilt scalable systems\n"
    "EDUCATION\nBachelor of Science - MIT - 2016"
)


class TestScenarios:
    """End-to-end behaviour on small documents."""

    def test_parse_with_header_block_and_two_sections_fills_every_part(self):
        out = parse_resume_rule(SCENARIO)

        assert out["name"] == "Jane Doe"
        assert out["title"] == "Senior Engineer"
        assert out["contact"]["email"] == "jane@x.com"
        assert out["experience"] == [
            {
                "title": "Lead Engineer",
                "company": "Acme Corp",
                "location": "NYC",
                "start_date": "2020",
                "end_date": "Present",
                "achievements": ["Built scalable systems"],
            }
        ]
        assert len(out["education"]) == 1
        edu = out["education"][0]
        assert edu["degree"] == "Bachelor of Science"
        assert edu["institution"] == "MIT"
        assert edu["graduation_date"] == "2016"

    def test_parse_education_line_with_three_parts_uses_third_as_location(self):
        """The third separator-delimited part is always the location, even a year."""
        out = parse_resume_rule(SCENARIO)
        assert out["education"][0]["location"] == "2016"

    def test_parse_skills_section_strips_bullets(self):
        out = parse_resume_rule("SKILLS\n• Python\n• Go")
        assert out["skills"] == ["Python", "Go"]

    def test_parse_headers_only_returns_empty_record(self):
        out = parse_resume_rule("EXPERIENCE\nEDUCATION\nSKILLS\nPROJECTS")
        for key in ("experience", "education", "skills", "projects", "certifications", "languages"):
            assert out[key] == []
        assert out["summary"] == ""

    @pytest.mark.parametrize("raw", ["", "   \n\n  \t", "\r\n\r\n"])
    def test_parse_blank_input_returns_default_record(self, raw):
        assert parse_resume_rule(raw) == new_resume()

    def test_parse_with_crlf_line_endings_matches_lf(self, sample_resume):
        assert parse_resume_rule(sample_resume.replace("\n", "\r\n")) == parse_resume_rule(sample_resume)

    @pytest.mark.parametrize("raw", [
        "|||\n---\n•••",
        "@@@@",
        "EXPERIENCE\n-\n–\n|",
        "PROJECTS\n•\nEDUCATION\nGPA\n" + "x" * 5000,
        "\x00\x01 binary � junk",
    ])
    def test_parse_garbage_never_raises(self, raw):
        out = parse_resume_rule(raw)
        assert set(out) == set(new_resume())


class TestFullResume:
    """The sample résumé exercises every section handler."""

    def test_contact_fields(self, sample_resume):
        contact = parse_resume_rule(sample_resume)["contact"]
        assert contact == {
            "email": "jane.doe@example.com",
            "phone": "(555) 123-4567",
            "location": "Austin, TX",
            "linkedin": "linkedin.com/in/janedoe",
            "github": "github.com/janedoe",
            "website": "https://janedoe.dev",
        }

    def test_summary_lines_are_space_joined(self, sample_resume):
        out = parse_resume_rule(sample_resume)
        assert out["summary"] == (
            "Backend engineer focused on distributed systems. "
            "Ten years building payment platforms."
        )

    def test_experience_entries_keep_order_and_achievements(self, sample_resume):
        jobs = parse_resume_rule(sample_resume)["experience"]
        assert [j["company"] for j in jobs] == ["Acme Corp", "Globex"]
        assert jobs[0]["start_date"] == "Jan 2020"
        assert jobs[0]["end_date"] == "Present"
        assert jobs[0]["achievements"] == ["Built scalable systems", "Mentored six engineers"]
        assert jobs[1]["location"] == "Remote"
        assert (jobs[1]["start_date"], jobs[1]["end_date"]) == ("2016", "2019")
        assert jobs[1]["achievements"] == ["Shipped the billing API"]

    def test_education_metadata(self, sample_resume):
        edu = parse_resume_rule(sample_resume)["education"][0]
        assert edu["institution"] == "State University"
        assert edu["location"] == "Austin"
        assert edu["graduation_date"] == "May 2015"
        assert edu["gpa"] == "3.8"
        assert edu["honors"] == "Magna Cum Laude"
        assert edu["coursework"] == ["Algorithms", "Databases"]

    def test_flat_lists(self, sample_resume):
        out = parse_resume_rule(sample_resume)
        assert out["skills"] == ["Python", "Go", "Kubernetes"]
        assert out["certifications"] == ["Certified Kubernetes Administrator"]
        assert out["languages"] == ["English", "Spanish"]

    def test_project_with_description_technologies_and_link(self, sample_resume):
        assert parse_resume_rule(sample_resume)["projects"] == [
            {
                "name": "Open Source Ledger",
                "description": "Double-entry bookkeeping library",
                "technologies": ["Python", "Postgres"],
                "link": "https://github.com/janedoe/ledger",
            }
        ]


class TestPersonalInfo:
    """Name, title and contact claims from the leading lines."""

    def test_first_email_wins(self):
        out = parse_resume_rule("Jane Doe\nfirst@x.com\nsecond@y.com")
        assert out["contact"]["email"] == "first@x.com"

    def test_first_phone_wins(self):
        out = parse_resume_rule("Jane Doe\nEngineer\n555-111-2222\n555-333-4444")
        assert out["contact"]["phone"] == "555-111-2222"

    def test_one_line_can_claim_several_contact_fields(self):
        out = parse_resume_rule("Jane Doe\nEngineer\njane@x.com | 555.123.4567")
        assert out["contact"]["email"] == "jane@x.com"
        assert out["contact"]["phone"] == "555.123.4567"

    def test_name_needs_two_to_four_words(self):
        assert parse_resume_rule("Jane\nEngineer")["name"] == ""
        assert parse_resume_rule("Mary Ann Van Der Berg\nEngineer")["name"] == ""
        assert parse_resume_rule("Mary-Ann O'Neil\nEngineer")["name"] == "Mary-Ann O'Neil"

    def test_title_requires_a_name_first(self):
        out = parse_resume_rule("Engineer\njane@x.com")
        assert out["title"] == ""

    def test_title_skips_lines_with_contact_markers_and_headers(self):
        out = parse_resume_rule("Jane Doe\n(555) 123-4567\nSUMMARY\nPlatform Engineer")
        assert out["title"] == "Platform Engineer"

    def test_title_line_is_not_reused_as_summary(self):
        out = parse_resume_rule("Jane Doe\nSUMMARY\nBuilds reliable systems\nLoves testing")
        assert out["title"] == "Builds reliable systems"
        assert out["summary"] == "Loves testing"

    def test_location_from_state_abbreviation(self):
        out = parse_resume_rule("Jane Doe\nEngineer\nAustin TX")
        assert out["contact"]["location"] == "Austin TX"

    def test_location_ignores_lines_claimed_by_other_fields(self):
        out = parse_resume_rule("Jane Doe\nEngineer\njane@x.com, NY\n555-123-4567, TX\nBoston, MA")
        assert out["contact"]["location"] == "Boston, MA"

    def test_contact_lines_outside_the_window_are_ignored(self):
        filler = "\n".join(f"Line number {i}" for i in range(12))
        out = parse_resume_rule(f"Jane Doe\nEngineer\n{filler}\nlate@x.com")
        assert out["contact"]["email"] == ""

    @pytest.mark.parametrize("filler_count, email", [(7, "edge@x.com"), (8, "")])
    def test_window_covers_exactly_ten_lines(self, filler_count, email):
        """Name, title and filler fill indices 0..filler_count+1; the email comes next."""
        filler = "\n".join(f"Line number {i}" for i in range(filler_count))
        out = parse_resume_rule(f"Jane Doe\nEngineer\n{filler}\nedge@x.com")
        assert out["contact"]["email"] == email

    def test_body_line_in_window_can_be_claimed_as_name(self):
        """Letters-only lines of two to four words are names, even under a header."""
        out = parse_resume_rule("EXPERIENCE\nEngineer - Acme\nEngineer - Acme - 2019 - 2021")
        assert out["name"] == "Engineer - Acme"
        assert out["title"] == "Engineer - Acme - 2019 - 2021"
        assert out["experience"] == []

    def test_website_skips_linkedin_and_github_urls(self):
        out = parse_resume_rule(
            "Jane Doe\nEngineer\nhttps://linkedin.com/in/jd\nhttps://github.com/jd\nwww.jd.dev"
        )
        assert out["contact"]["linkedin"] == "https://linkedin.com/in/jd"
        assert out["contact"]["github"] == "https://github.com/jd"
        assert out["contact"]["website"] == "www.jd.dev"

    def test_extract_personal_info_reports_name_and_title_indices(self):
        record = new_resume()
        taken = extract_personal_info(["Jane Doe", "jane@x.com", "Staff Engineer"], record)
        assert taken == {0, 2}
        assert record["title"] == "Staff Engineer"


class TestSectionBodies:
    """Per-section accumulation rules."""

    def test_job_line_needs_a_year_or_present(self):
        out = _parse_body(
            "EXPERIENCE\nEngineer - Acme\nEngineer - Acme - 2019 - 2021\nShipped things"
        )
        assert len(out["experience"]) == 1
        assert out["experience"][0]["achievements"] == ["Shipped things"]

    def test_job_line_with_current_has_present_end_date(self):
        job = _parse_body("EXPERIENCE\nDev | Initech | Remote | Mar 2021 - Current")["experience"][0]
        assert job["start_date"] == "Mar 2021"
        assert job["end_date"] == "Present"

    def test_achievements_before_any_job_are_dropped(self):
        out = _parse_body("EXPERIENCE\n• Orphan bullet\nDev - Initech - Remote - 2020 - 2022")
        assert out["experience"][0]["achievements"] == []

    def test_closed_entry_gets_no_lines_after_section_change(self):
        out = _parse_body(
            "EXPERIENCE\nDev - Initech - Remote - 2020 - 2022\n• First\n"
            "SKILLS\n• Python\n"
            "EXPERIENCE\n• Belongs nowhere\n"
        )
        assert out["experience"][0]["achievements"] == ["First"]

    def test_experience_order_is_preserved(self):
        jobs = "\n".join(f"Role {i} - Company {i} - City - 20{10 + i} - 20{11 + i}" for i in range(5))
        out = _parse_body("EXPERIENCE\n" + jobs)
        assert [j["company"] for j in out["experience"]] == [f"Company {i}" for i in range(5)]

    def test_education_gpa_first_value_wins(self):
        out = _parse_body(
            "EDUCATION\nMaster of Arts - Columbia University - 2012\n"
            "Overall gpa 3.95 of 4.00\nMajor gpa 4.0"
        )
        assert out["education"][0]["gpa"] == "3.95"

    def test_bare_gpa_line_is_read_as_a_header(self):
        """All-caps 'GPA: 3.8' passes the header test and closes the education entry."""
        out = _parse_body(
            "EDUCATION\nBachelor of Arts - Oberlin College - 2010\nGPA: 3.8\nSumma Cum Laude"
        )
        assert out["education"][0]["gpa"] == ""
        assert out["education"][0]["honors"] == ""

    def test_education_lines_before_a_degree_are_ignored(self):
        out = _parse_body("EDUCATION\nCumulative GPA: 3.1\nHigh school diploma")
        assert out["education"] == []

    def test_project_short_unbulleted_line_continues_description(self):
        out = _parse_body("PROJECTS\nWeather dashboard app\nUses React\n- Deployed on Fly")
        assert out["projects"][0]["description"] == "Uses React Deployed on Fly"

    def test_project_long_unbulleted_line_starts_new_project(self):
        out = _parse_body("PROJECTS\nWeather dashboard app\nCompiler for a toy language")
        assert [p["name"] for p in out["projects"]] == ["Weather dashboard app", "Compiler for a toy language"]

    def test_bullet_markers_are_stripped_from_flat_lists(self):
        out = _parse_body(
            "CERTIFICATIONS\n•   Security+ Cert\n*Azure Fundamentals\nLANGUAGES\n- French\nGerman"
        )
        assert out["certifications"] == ["Security+ Cert", "Azure Fundamentals"]
        assert out["languages"] == ["French", "German"]

    def test_lone_bullet_marker_adds_nothing(self):
        out = _parse_body("SKILLS\n•\n• Rust")
        assert out["skills"] == ["Rust"]

    def test_unknown_section_lines_are_dropped(self):
        out = _parse_body("AWARDS\nBest paper 2019\nSKILLS\n• Rust")
        assert out["skills"] == ["Rust"]
        assert out["summary"] == ""

    def test_content_before_first_header_is_not_summary(self):
        out = parse_resume_rule("Jane Doe\nEngineer\nA stray sentence before headers.\nSKILLS\n• Rust")
        assert out["summary"] == ""

    def test_uppercase_acronym_bullet_is_read_as_a_header(self):
        """Short all-caps lines switch section; later skills are lost."""
        out = _parse_body("SKILLS\n• Python\n• AWS\n• Docker")
        assert out["skills"] == ["Python"]
