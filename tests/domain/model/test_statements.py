from __future__ import annotations

import pytest

from wikiedit.domain.model import (
    DataValue,
    EntityDocument,
    MonolingualText,
    Reference,
    Snak,
    SnakType,
    Statement,
)

from tests.helpers.entities import instance_of, make_document


def test_statement_equality_ignores_id() -> None:
    assert instance_of("Q5", statement_id="Q1$a") == instance_of("Q5", statement_id="Q1$b")
    assert instance_of("Q5") != instance_of("Q6")


def test_reference_equality_ignores_hash() -> None:
    snaks = (Snak.of("P248", DataValue.entity("Q14005")),)

    assert Reference(snaks=snaks, hash="abc") == Reference(snaks=snaks)


def test_snak_equality_ignores_datatype() -> None:
    value = DataValue.string("Felis catus")

    assert Snak.of("P225", value) == Snak("P225", value=value, datatype="string")


def test_value_snak_requires_value() -> None:
    with pytest.raises(ValueError, match="P31"):
        Snak("P31")


def test_novalue_snak_rejects_value() -> None:
    with pytest.raises(ValueError, match="P31"):
        Snak("P31", SnakType.NO_VALUE, DataValue.entity("Q5"))


def test_entity_value_is_normalized() -> None:
    assert DataValue.entity("q5").value == {"entity-type": "item", "numeric-id": 5, "id": "Q5"}
    assert DataValue.entity("P31").value["entity-type"] == "property"
    assert DataValue.entity("M12").value["entity-type"] == "mediainfo"


def test_sense_value_has_no_numeric_id() -> None:
    assert DataValue.entity("L7-S1").value == {"entity-type": "sense", "id": "L7-S1"}


def test_entity_value_with_unknown_prefix_is_rejected() -> None:
    with pytest.raises(ValueError, match="X1"):
        DataValue.entity("X1")


def test_quantity_amount_is_signed() -> None:
    assert DataValue.quantity("4").value == {"amount": "+4", "unit": "1"}
    assert DataValue.quantity("-2").value["amount"] == "-2"


def test_statement_json_groups_qualifiers() -> None:
    statement = Statement(
        main_snak=Snak.of("P1843", DataValue.monolingual_text("de", "Katze")),
        qualifiers=(
            Snak("P518", SnakType.SOME_VALUE),
            Snak.of("P7018", DataValue.entity("Q1")),
            Snak("P518", SnakType.NO_VALUE),
        ),
        statement_id="Q146$x",
    )

    data = statement.to_json()

    assert data["id"] == "Q146$x"
    assert data["mainsnak"]["datavalue"] == {
        "type": "monolingualtext",
        "value": {"language": "de", "text": "Katze"},
    }
    assert data["qualifiers-order"] == ["P518", "P7018"]
    assert [snak["snaktype"] for snak in data["qualifiers"]["P518"]] == ["somevalue", "novalue"]
    assert "references" not in data


def test_monolingual_text_json() -> None:
    assert MonolingualText("fr", "Chat").to_json() == {"language": "fr", "value": "Chat"}


def test_document_lookups() -> None:
    document = make_document(
        labels={"en": "Cat"},
        statements=(instance_of("Q146", statement_id="Q1$cat"),),
    )

    assert document.label("en") == "Cat"
    assert document.label("fr") is None
    assert document.statements_for("P31") == (instance_of("Q146"),)
    assert document.statements_for("P279") == ()
    assert document.statement_by_id("Q1$cat") == instance_of("Q146")
    assert document.statement_by_id("Q1$gone") is None


def test_new_document_is_blank() -> None:
    document = EntityDocument()

    assert document.entity_id is None
    assert document.labels == {}
    assert document.statements == ()
