"""Tests for the generator registry."""

import json

import pytest

from optionhandler.codegen.core.generator import CodeGenerator
from optionhandler.codegen.languages.python import PythonGenerator
from optionhandler.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)


class EchoGenerator(CodeGenerator):
    """Minimal generator emitting the class name."""

    @property
    def language_name(self):
        return "echo"

    @property
    def file_extension(self):
        return ".txt"

    def generate(self, definition):
        return definition.class_name

    def module_filename(self, definition):
        return definition.class_name + self.file_extension


class TestGeneratorRegistry:
    """Test GeneratorRegistry class."""

    def setup_method(self):
        self.registry = GeneratorRegistry()
        self.registry.register("python", PythonGenerator, aliases=["py"])

    def test_resolve(self):
        assert self.registry.resolve("python") == "python"
        assert self.registry.resolve("PY") == "python"

    def test_resolve_unknown(self):
        with pytest.raises(RegistryError, match="Available: python"):
            self.registry.resolve("cobol")

    def test_register_rejects_non_generator(self):
        with pytest.raises(RegistryError):
            self.registry.register("bogus", dict)

    def test_register_existing_is_skipped(self):
        self.registry.register("python", EchoGenerator)

        assert self.registry.get_generator_class("python") is PythonGenerator

    def test_register_replace(self):
        self.registry.register("python", EchoGenerator, replace=True)

        assert self.registry.get_generator_class("py") is EchoGenerator

    def test_alias_conflicts(self):
        with pytest.raises(RegistryError, match="conflicts"):
            self.registry.register("echo", EchoGenerator, aliases=["python"])
        with pytest.raises(RegistryError, match="already points"):
            self.registry.register("echo2", EchoGenerator, aliases=["py"])

    def test_unregister(self):
        self.registry.unregister("python")

        assert not self.registry.is_supported("python")
        assert not self.registry.is_supported("py")
        assert self.registry.list_languages() == []

    def test_aliases(self):
        self.registry.register("echo", EchoGenerator, aliases=["e", "ECHO", "say"])

        assert self.registry.list_languages() == ["echo", "python"]
        assert self.registry.get_aliases_for_language("echo") == ["e", "say"]

    def test_create_generator_from_dict(self):
        generator = self.registry.create_generator("py", {"copyright_year": 2001})

        assert isinstance(generator, PythonGenerator)
        assert generator.config.copyright_year == 2001

    def test_create_generator_from_file(self, tmp_path):
        path = tmp_path / "gen.json"
        path.write_text(json.dumps({"add_comments": False}))

        generator = self.registry.create_generator("python", str(path))

        assert generator.config.add_comments is False

    def test_create_generator_bad_config(self, tmp_path):
        with pytest.raises(RegistryError, match="Failed to create"):
            self.registry.create_generator("python", tmp_path / "missing.json")

    def test_create_generator_bad_config_type(self):
        with pytest.raises(RegistryError, match="Invalid config type"):
            self.registry.create_generator("python", 42)

    def test_language_info(self):
        info = self.registry.get_language_info("py")

        assert info["name"] == "python"
        assert info["class"] == "PythonGenerator"
        assert info["file_extension"] == ".py"
        assert info["aliases"] == ["py"]


class TestGlobalRegistry:
    def test_python_registered(self):
        assert list_supported_languages() == ["python"]
        assert is_language_supported("py")
        assert not is_language_supported("go")

    def test_get_generator(self):
        assert isinstance(get_generator(), PythonGenerator)

    def test_get_language_info(self):
        assert get_language_info("python")["aliases"] == ["py"]
