from __future__ import annotations

import pytest

from election_predicter.candidates.model import Candidate, Party, Sex


def test_sex_defaults_to_female() -> None:
    c = Candidate(party=Party.GREEN, first_name="Margie", last_name="Young")
    assert c.sex is Sex.FEMALE


def test_enum_fields_coerced_from_values() -> None:
    c = Candidate(party="Libertarian", first_name="Barney", last_name="Fitzgerald", sex="Male")
    assert c.party is Party.LIBERTARIAN
    assert c.sex is Sex.MALE


def test_party_has_four_members_and_sex_two() -> None:
    assert [p.value for p in Party] == ["Republican", "Democrat", "Green", "Libertarian"]
    assert [s.value for s in Sex] == ["Male", "Female"]


@pytest.mark.parametrize("field", ["first_name", "last_name"])
def test_names_must_be_present(field: str) -> None:
    kwargs = {"party": Party.DEMOCRAT, "first_name": "A", "last_name": "B", field: "  "}
    with pytest.raises(ValueError) as ei:
        Candidate(**kwargs)
    assert field in str(ei.value)


def test_unknown_party_rejected() -> None:
    with pytest.raises(ValueError) as ei:
        Candidate(party="Whig", first_name="A", last_name="B")
    assert "Whig" in str(ei.value)


def test_describe_formats_prediction_line() -> None:
    c = Candidate(party=Party.REPUBLICAN, first_name="Bartholemew", last_name="Bad", sex=Sex.MALE)
    assert (
        c.describe("predict_treasurer", "treasurer")
        == "predict_treasurer: The treasurer is Bartholemew Bad (Male) of the Republican party!"
    )
    assert c.display_name == "Bartholemew Bad"
    assert c.to_dict() == {
        "party": "Republican",
        "first_name": "Bartholemew",
        "last_name": "Bad",
        "sex": "Male",
    }
