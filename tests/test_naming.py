"""Tests for naming utilities."""

import pytest

from optionhandler.codegen.core.naming import (
    NameSanitizer,
    NamingCase,
    PYTHON_RESERVED_WORDS,
    convert_case,
    create_option_sanitizer,
    derive_flag,
    module_path,
    to_snake_case,
    trim_class,
)


class TestCaseConversion:
    """Test case conversion helpers."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("capacity", "capacity"),
            ("multiClassStrategy", "multi_class_strategy"),
            ("AbstractMySVM", "abstract_my_svm"),
            ("HTTPServer", "http_server"),
            ("kernel2Type", "kernel2_type"),
            ("already_snake", "already_snake"),
            ("with-dash", "with_dash"),
        ],
    )
    def test_to_snake_case(self, name, expected):
        assert to_snake_case(name) == expected

    def test_convert_case(self):
        assert convert_case("multiClassStrategy", NamingCase.SCREAMING_SNAKE) == "MULTI_CLASS_STRATEGY"
        assert convert_case("multi_class_strategy", NamingCase.CAMEL_CASE) == "multiClassStrategy"
        assert convert_case("multi_class_strategy", NamingCase.PASCAL_CASE) == "MultiClassStrategy"
        assert convert_case("multiClassStrategy", NamingCase.KEBAB_CASE) == "multi-class-strategy"


class TestDeriveFlag:
    """Test flag derivation from property names."""

    @pytest.mark.parametrize(
        "prop,flag",
        [
            ("multiClassStrategy", "multi-class-strategy"),
            ("capacity", "capacity"),
            ("numFolds", "num-folds"),
            ("useSVM", "use-svm"),
            ("max_depth", "max_depth"),
        ],
    )
    def test_derive_flag(self, prop, flag):
        assert derive_flag(prop) == flag


class TestDottedNames:
    def test_trim_class(self):
        assert trim_class("mypkg.classifiers.AbstractClassifier") == "AbstractClassifier"
        assert trim_class("Plain") == "Plain"

    def test_module_path(self):
        assert module_path("mypkg.classifiers.AbstractClassifier") == "mypkg.classifiers"
        assert module_path("Plain") == ""


class TestNameSanitizer:
    """Test NameSanitizer class."""

    def setup_method(self):
        self.sanitizer = create_option_sanitizer()

    def test_plain_name(self):
        assert self.sanitizer.sanitize_name("multiClassStrategy") == "multi_class_strategy"

    def test_keyword_gets_suffix(self):
        assert "class" in PYTHON_RESERVED_WORDS
        assert self.sanitizer.sanitize_name("class") == "class_"

    @pytest.mark.parametrize("name", ["type", "property", "options", "global_info"])
    def test_builtin_and_protocol_names_get_suffix(self, name):
        assert self.sanitizer.sanitize_name(name) == f"{name}_"

    def test_duplicates_get_counter(self):
        first = self.sanitizer.sanitize_name("maxSteps")
        second = self.sanitizer.sanitize_name("max_steps")

        assert first == "max_steps"
        assert second == "max_steps1"

    def test_cache_returns_same_name(self):
        assert self.sanitizer.sanitize_name("rate") == self.sanitizer.sanitize_name("rate")

    def test_reset_used_names(self):
        self.sanitizer.sanitize_name("rate")
        self.sanitizer.reset_used_names()

        assert self.sanitizer.sanitize_name("rate") == "rate"

    def test_add_used_name(self):
        self.sanitizer.add_used_name("rate")

        assert self.sanitizer.sanitize_name("rate") == "rate1"

    def test_invalid_characters(self):
        sanitizer = NameSanitizer()

        assert sanitizer.sanitize_name("1st value") == "_1st_value"
        assert sanitizer.sanitize_name("!!!") == "option"
