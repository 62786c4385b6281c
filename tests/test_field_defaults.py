# ==============================================
# Tests for the field defaulting table
# ==============================================

import pytest

from registry_normalize.normalization import PACKAGE_FIELDS, FieldDefaulter, FieldSpec, TypeDetector
from registry_normalize.normalization.field_defaults import coerce_keywords, finalize_keywords


@pytest.fixture
def defaulter():
    return FieldDefaulter()


class TestTable:

    def test_table_order_and_keys(self):
        assert [spec.key for spec in PACKAGE_FIELDS] == [
            "bundledDependencies", "dependencies", "description", "devDependencies",
            "engines", "keywords", "maintainers", "optionalDependencies",
            "peerDependencies", "readme", "readmeFilename", "scripts", "time",
            "version", "versions", "_npmUser",
        ]

    def test_only_people_fields_are_enriched(self):
        assert {spec.key for spec in PACKAGE_FIELDS if spec.enrich} == {"maintainers", "_npmUser"}

    def test_defaults_are_fresh(self):
        spec = FieldSpec("x", list)
        assert spec.default_value() is not spec.default_value()


class TestFieldDefaulter:

    def test_empty_record_gets_all_defaults(self, defaulter):
        values = defaulter.apply({}, {})
        for spec in PACKAGE_FIELDS:
            assert values[spec.key] == spec.default_value()

    def test_latest_release_wins(self, defaulter):
        values = defaulter.apply({"description": "top"}, {"description": "latest"})
        assert values["description"] == "latest"

    def test_falls_back_to_top_level(self, defaulter):
        values = defaulter.apply({"description": "top"}, {"description": ""})
        assert values["description"] == "top"

    def test_empty_container_in_latest_still_wins(self, defaulter):
        values = defaulter.apply({"dependencies": {"a": "1"}}, {"dependencies": {}})
        assert values["dependencies"] == {}

    @pytest.mark.parametrize("key, bad", [
        ("dependencies", ["a"]),
        ("description", {"text": "x"}),
        ("maintainers", "alice"),
        ("time", "2020-01-01"),
        ("version", 1),
    ])
    def test_wrong_type_replaced_with_default(self, defaulter, key, bad):
        values = defaulter.apply({key: bad}, {})
        spec = next(s for s in PACKAGE_FIELDS if s.key == key)
        assert values[key] == spec.default_value()

    def test_types_always_match_defaults(self, defaulter):
        garbage = {spec.key: 42 for spec in PACKAGE_FIELDS}
        values = defaulter.apply(garbage, {})
        for spec in PACKAGE_FIELDS:
            assert TypeDetector.detect(values[spec.key]) is spec.expected_type

    def test_maintainers_enriched_per_element(self, defaulter):
        values = defaulter.apply({"maintainers": [{"email": "a@b.com"}, "bob"]}, {})
        assert "gravatar" in values["maintainers"][0]
        assert values["maintainers"][1] == "bob"

    def test_npm_user_enriched_once(self, defaulter):
        values = defaulter.apply({"_npmUser": {"name": "a", "email": "a@b.com"}}, {})
        assert values["_npmUser"]["gravatar"].startswith("https://secure.gravatar.com/avatar/")

    def test_input_not_mutated(self, defaulter):
        record = {"_npmUser": {"email": "a@b.com"}}
        defaulter.apply(record, {})
        assert record == {"_npmUser": {"email": "a@b.com"}}

    def test_custom_enricher(self):
        class Upper:
            def apply_once(self, value):
                return value

            def apply_to_each(self, values):
                return [str(v).upper() for v in values]

        defaulter = FieldDefaulter(fields=(FieldSpec("tags", list, enrich="upper"),), enrichers={"upper": Upper()})
        assert defaulter.apply({"tags": ["a", "b"]}, {}) == {"tags": ["A", "B"]}


class TestKeywords:

    def test_string_keywords_split(self, defaulter):
        values = defaulter.apply({"keywords": "pad, string  left|right"}, {})
        assert values["keywords"] == ["pad", "string", "left", "right"]

    def test_list_keywords_untouched(self):
        assert coerce_keywords(["a b"]) == ["a b"]

    def test_finalize_splits_string(self):
        assert finalize_keywords({"keywords": "a,b"}) == {"keywords": ["a", "b"]}

    def test_finalize_drops_non_list(self):
        assert finalize_keywords({"keywords": 5}) == {}
        assert finalize_keywords({}) == {}
