"""Unit tests for resume text parsing."""

import dataclasses

import pytest

from cvpress.contexts.parsing import (
    EntriesSection,
    GeneralSection,
    LineShape,
    NarrativeSection,
    SectionKind,
    SkillsSection,
    classify_line,
    parse_resume,
)

JANE_DOE = (
    "Jane Doe\n"
    "Software Engineer\n"
    "jane@x.com | linkedin.com/janedoe\n"
    "EXPERIENCE\n"
    "Engineer - Acme Corp | Jan 2020 - Present\n"
    "• Built things\n"
    "SKILLS\n"
    "Languages: Go, Python"
)


@pytest.mark.unit
def test_parse_reference_resume():
    """Test the full header/entry/skills structure of a small resume."""
    model = parse_resume(JANE_DOE)

    assert model.header.name == "Jane Doe"
    assert model.header.title == "Software Engineer"
    assert model.header.contact == ("jane@x.com", "linkedin.com/janedoe")
    assert model.header.contact_groups() == [("jane@x.com", "linkedin.com/janedoe")]
    assert list(model.sections) == ["EXPERIENCE", "SKILLS"]

    experience = model.sections["EXPERIENCE"]
    assert isinstance(experience, EntriesSection)
    assert len(experience.entries) == 1
    entry = experience.entries[0]
    assert entry.title == "Engineer"
    assert entry.organization == "Acme Corp"
    assert entry.date == "Jan 2020 - Present"
    assert entry.bullets == ("Built things",)

    skills = model.sections["SKILLS"]
    assert isinstance(skills, SkillsSection)
    assert dict(skills.categories) == {"Languages": ("Go", "Python")}
    assert skills.items == ()


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "\n\n", "   \n\t\n  "])
def test_parse_empty_input(text):
    """Test that blank input gives an empty model without raising."""
    model = parse_resume(text)

    assert model.header.name == ""
    assert len(model.sections) == 0
    assert model.is_empty


@pytest.mark.unit
def test_name_is_first_non_blank_line():
    """Test that leading blank lines and surrounding spaces are ignored."""
    model = parse_resume("\n\n   John Smith   \nData Scientist\nSUMMARY\nLoves data.")
    assert model.header.name == "John Smith"
    assert model.header.title == "Data Scientist"


@pytest.mark.unit
def test_contact_like_second_line_is_not_title():
    """Test that a second line with '@' or '|' is read as contact info."""
    model = parse_resume("Jane Doe\njane@x.com | 555-1234\nSUMMARY\nBuilds things.")

    assert model.header.title == ""
    assert model.header.contact == ("jane@x.com", "555-1234")


@pytest.mark.unit
def test_contact_block_stops_after_five_header_lines():
    """Test that contact accumulation ends at the fifth header line."""
    text = "Jane Doe\nEngineer\njane@x.com\n(555) 123-4567\nhttps://jane.dev\ngithub | gitlab"
    model = parse_resume(text)

    assert model.header.contact == ("jane@x.com", "(555) 123-4567", "https://jane.dev")
    assert model.preamble == ("github | gitlab",)


@pytest.mark.unit
def test_contact_block_stops_at_non_contact_line():
    """Test that the first line without contact markers ends the header."""
    model = parse_resume("Jane Doe\nEngineer\njane@x.com\nBerlin\nSUMMARY\nHello.")

    assert model.header.contact == ("jane@x.com",)
    assert model.preamble == ("Berlin",)
    assert isinstance(model.sections["SUMMARY"], NarrativeSection)


@pytest.mark.unit
def test_entry_with_date_location_technologies_and_description():
    """Test that standalone date, location and technologies lines attach to the open entry."""
    text = (
        "Jane Doe\nEngineer\n"
        "EXPERIENCE\n"
        "Senior Engineer - Globex\n"
        "Jan 2019 - Dec 2021\n"
        "Remote\n"
        "Shipped the billing platform.\n"
        "• Led the migration\n"
        "- Cut costs by 30%\n"
        "Technologies: Go, Kafka\n"
    )
    entry = parse_resume(text).sections["EXPERIENCE"].entries[0]

    assert entry.title == "Senior Engineer"
    assert entry.organization == "Globex"
    assert entry.date == "Jan 2019 - Dec 2021"
    assert entry.location == "Remote"
    assert entry.description == ("Shipped the billing platform.",)
    assert entry.bullets == ("Led the migration", "Cut costs by 30%")
    assert entry.technologies == "Technologies: Go, Kafka"


@pytest.mark.unit
def test_entry_heading_extra_parts():
    """Test that parts after organization and date fill location."""
    text = "Jane Doe\nEngineer\nEDUCATION\nBSc Physics - MIT | 2014 - 2018 | Cambridge, MA"
    entry = parse_resume(text).sections["EDUCATION"].entries[0]

    assert entry.title == "BSc Physics"
    assert entry.organization == "MIT"
    assert entry.date == "2014 - 2018"
    assert entry.location == "Cambridge, MA"


@pytest.mark.unit
def test_city_state_line_sets_location():
    """Test that a 'City, ST' line is recognized as a location."""
    text = "Jane Doe\nEngineer\nEXPERIENCE\nEngineer - Initech\nSan Francisco, CA"
    entry = parse_resume(text).sections["EXPERIENCE"].entries[0]
    assert entry.location == "San Francisco, CA"


@pytest.mark.unit
def test_multiple_entries_keep_order():
    """Test that each title line closes the previous entry."""
    text = (
        "Jane Doe\nEngineer\n"
        "EXPERIENCE\n"
        "Engineer - Acme | 2020 - Present\n"
        "• Built things\n"
        "Intern - Initech | 2019\n"
        "• Fixed bugs\n"
    )
    entries = parse_resume(text).sections["EXPERIENCE"].entries

    assert [entry.organization for entry in entries] == ["Acme", "Initech"]
    assert entries[0].bullets == ("Built things",)
    assert entries[1].bullets == ("Fixed bugs",)


@pytest.mark.unit
def test_sentence_continues_open_entry():
    """Test that sentences describe the open entry instead of starting a new one."""
    text = (
        "Jane Doe\nEngineer\nPROJECTS\n"
        "Realtime Chat\n"
        "A websocket chat server.\n"
        "Deployed to thousands of users!\n"
    )
    entries = parse_resume(text).sections["PROJECTS"].entries

    assert len(entries) == 1
    assert entries[0].title == "Realtime Chat"
    assert entries[0].description == ("A websocket chat server.", "Deployed to thousands of users!")


@pytest.mark.unit
def test_lines_before_first_entry_become_notes():
    """Test that entry-section lines with no open entry are kept as notes."""
    text = "Jane Doe\nEngineer\nEXPERIENCE\n• orphan bullet\nEngineer - Acme"
    section = parse_resume(text).sections["EXPERIENCE"]

    assert section.notes == ("• orphan bullet",)
    assert len(section.entries) == 1


@pytest.mark.unit
def test_skills_categories_merge_and_flat_items():
    """Test category merging, bullet-marked categories and uncategorized lines."""
    text = (
        "Jane Doe\nEngineer\n"
        "SKILLS\n"
        "Languages: Go, Python\n"
        "• Cloud: AWS, GCP\n"
        "Languages: Rust\n"
        "Docker and Kubernetes\n"
    )
    skills = parse_resume(text).sections["SKILLS"]

    assert dict(skills.categories) == {
        "Languages": ("Go", "Python", "Rust"),
        "Cloud": ("AWS", "GCP"),
    }
    assert skills.items == ("Docker and Kubernetes",)


@pytest.mark.unit
def test_narrative_section_joins_lines():
    """Test that summary lines are joined with single spaces."""
    text = "Jane Doe\nEngineer\nSUMMARY\nBuilds reliable systems.\nLoves Go."
    summary = parse_resume(text).sections["SUMMARY"]

    assert summary.kind is SectionKind.NARRATIVE
    assert summary.text == "Builds reliable systems. Loves Go."


@pytest.mark.unit
def test_general_section_keeps_raw_lines():
    """Test that unrecognized sections keep their lines verbatim."""
    text = "Jane Doe\nEngineer\nCERTIFICATIONS\n• AWS Solutions Architect\nCertified Kubernetes Administrator, 2021"
    section = parse_resume(text).sections["CERTIFICATIONS"]

    assert isinstance(section, GeneralSection)
    assert section.lines == ("• AWS Solutions Architect", "Certified Kubernetes Administrator, 2021")


@pytest.mark.unit
def test_colon_header_and_kind_inference():
    """Test that a trailing colon marks a header and is dropped from the name."""
    text = "Jane Doe\nEngineer\nProjects:\nCompiler - personal\nProfile:\nCurious."
    model = parse_resume(text)

    assert list(model.sections) == ["Projects", "Profile"]
    assert model.sections["Projects"].kind is SectionKind.ENTRIES
    assert model.sections["Profile"].kind is SectionKind.NARRATIVE


@pytest.mark.unit
def test_duplicate_section_header_merges():
    """Test that a repeated section header re-opens the first one."""
    text = (
        "Jane Doe\nEngineer\n"
        "EXPERIENCE\nEngineer - Acme\n"
        "SKILLS\nGo: fast\n"
        "EXPERIENCE\nIntern - Initech\n"
    )
    model = parse_resume(text)

    assert list(model.sections) == ["EXPERIENCE", "SKILLS"]
    assert [e.organization for e in model.sections["EXPERIENCE"].entries] == ["Acme", "Initech"]


@pytest.mark.unit
def test_stale_page_footer_is_dropped():
    """Test that 'Page x of y' lines from a previous render are ignored."""
    text = "Jane Doe\nEngineer\nSUMMARY\nText here.\nPage 1 of 2"
    assert parse_resume(text).sections["SUMMARY"].text == "Text here."


@pytest.mark.unit
def test_bullets_never_keep_marker():
    """Test that stored bullets have the marker and whitespace removed."""
    text = "Jane Doe\nEngineer\nEXPERIENCE\nDev - Co\n•   spaced\n* star\n▪ square"
    bullets = parse_resume(text).sections["EXPERIENCE"].entries[0].bullets

    assert bullets == ("spaced", "star", "square")


@pytest.mark.unit
def test_model_is_immutable():
    """Test that the returned model cannot be modified."""
    model = parse_resume(JANE_DOE)

    with pytest.raises(TypeError):
        model.sections["NEW"] = model.sections["SKILLS"]
    with pytest.raises(dataclasses.FrozenInstanceError):
        model.sections["EXPERIENCE"].entries[0].title = "Boss"


@pytest.mark.unit
def test_parser_never_raises_on_odd_input():
    """Test that punctuation-only lines are kept rather than rejected."""
    model = parse_resume("•\n-\n***\n:\n|||")

    assert model.header.name == "•"
    assert model.preamble == ("***", ":", "|||")


@pytest.mark.unit
def test_to_dict_is_plain():
    """Test the plain-container form used for YAML dumps."""
    data = parse_resume(JANE_DOE).to_dict()

    assert data["header"]["contact"] == ["jane@x.com", "linkedin.com/janedoe"]
    assert data["sections"]["SKILLS"] == {
        "kind": "skills",
        "categories": {"Languages": ["Go", "Python"]},
        "list": [],
    }
    assert data["sections"]["EXPERIENCE"]["entries"][0]["date"] == "Jan 2020 - Present"


@pytest.mark.unit
@pytest.mark.parametrize(
    "line, shape",
    [
        ("• Built things", LineShape.BULLET),
        ("Jan 2020 - Present", LineShape.DATE),
        ("2020 - 2022", LineShape.DATE),
        ("03/2019 to 05/2021", LineShape.DATE),
        ("(Remote)", LineShape.LOCATION),
        ("Austin, TX", LineShape.LOCATION),
        ("EXPERIENCE", LineShape.SECTION_HEADER),
        ("Work History:", LineShape.SECTION_HEADER),
        ("Built with React and Node", LineShape.TECHNOLOGIES),
        ("Engineer - Acme Corp | Jan 2020 - Present", LineShape.DASHED),
        ("Improved latency by half.", LineShape.SENTENCE),
        ("Languages: Go, Python", LineShape.WORDED),
        ("42% growth", LineShape.OTHER),
    ],
)
def test_classify_line(line, shape):
    """Test line shape classification priority."""
    assert classify_line(line) is shape


@pytest.mark.unit
def test_work_mode_word_in_dashed_title_starts_entry():
    """Test that a title beginning with a work mode word still starts a new entry."""
    text = (
        "Jane Doe\nEngineer\n"
        "EXPERIENCE\n"
        "Engineer - Acme | 2020\n"
        "• Built the API\n"
        "Hybrid Cloud Architect - IBM\n"
        "• Designed the landing zone\n"
    )
    entries = parse_resume(text).sections["EXPERIENCE"].entries

    assert [entry.title for entry in entries] == ["Engineer", "Hybrid Cloud Architect"]
    assert entries[0].location == ""
    assert entries[0].bullets == ("Built the API",)
    assert entries[1].organization == "IBM"
    assert entries[1].bullets == ("Designed the landing zone",)


@pytest.mark.unit
def test_title_with_comma_and_capitals_starts_entry():
    """Test that 'Title, XX' lines that are not places start a new entry."""
    text = (
        "Jane Doe\nEngineer\n"
        "EXPERIENCE\n"
        "Engineer - Acme | 2020\n"
        "• Built the API\n"
        "Software Engineer, ML\n"
        "• Trained ranking models\n"
    )
    entries = parse_resume(text).sections["EXPERIENCE"].entries

    assert [entry.title for entry in entries] == ["Engineer", "Software Engineer, ML"]
    assert entries[0].location == ""
    assert entries[0].bullets == ("Built the API",)
    assert entries[1].bullets == ("Trained ranking models",)


@pytest.mark.unit
def test_first_entry_title_starting_with_work_mode():
    """Test that the first entry of a section is kept even if it begins with 'Remote'."""
    text = "Jane Doe\nEngineer\nEXPERIENCE\nRemote Sensing Intern - NASA\n• Mapped glaciers"
    section = parse_resume(text).sections["EXPERIENCE"]

    assert section.notes == ()
    assert len(section.entries) == 1
    assert section.entries[0].title == "Remote Sensing Intern"
    assert section.entries[0].organization == "NASA"
    assert section.entries[0].bullets == ("Mapped glaciers",)


@pytest.mark.unit
def test_place_line_without_open_entry_starts_entry():
    """Test that a place-like line with nothing to attach to becomes an entry title."""
    text = "Jane Doe\nEngineer\nEDUCATION\nBoston, MA\n• Exchange semester\nEngineer - Acme\nAustin, TX\nDallas, TX"
    entries = parse_resume(text).sections["EDUCATION"].entries

    assert [entry.title for entry in entries] == ["Boston, MA", "Engineer", "Dallas, TX"]
    assert entries[0].bullets == ("Exchange semester",)
    assert entries[1].location == "Austin, TX"


@pytest.mark.unit
@pytest.mark.parametrize(
    "line, shape",
    [
        ("Remote", LineShape.LOCATION),
        ("Remote, US", LineShape.LOCATION),
        ("Hybrid (Berlin)", LineShape.LOCATION),
        ("Berlin, DE", LineShape.LOCATION),
        ("Toronto, ON (Hybrid)", LineShape.LOCATION),
        ("Remote Sensing Intern", LineShape.WORDED),
        ("Hybrid Cloud Architect - IBM", LineShape.DASHED),
        ("Software Engineer, ML", LineShape.WORDED),
        ("Austin, TX - Remote", LineShape.DASHED),
    ],
)
def test_location_shape_boundaries(line, shape):
    """Test which place and work mode lines count as locations."""
    assert classify_line(line) is shape
