"""
Shared fixtures for the optionhandler tests.

Generated modules are written to tmp_path and imported from there so that
the tests exercise the emitted code, not just its text.
"""

import importlib.util
import itertools
import json
import sys

import pytest

from optionhandler.codegen.core.config import GeneratorConfig
from optionhandler.codegen.core.schema import convert_definition
from optionhandler.codegen.languages.python import PythonGenerator


@pytest.fixture
def capacity_data():
    """Root definition with a single double option."""
    return {
        "name": "MySVM",
        "prefix": "Abstract",
        "package": "mypkg.classifiers",
        "implement": ["optionhandler.codec.OptionHandler"],
        "author": "Jane Doe",
        "organization": "University of Waikato",
        "options": [
            {
                "property": "capacity",
                "type": "double",
                "default": "1.0",
                "help": "The capacity parameter.",
            }
        ],
    }


@pytest.fixture
def chained_data():
    """Definition chaining to sample_handlers.BaseClassifier, one option per kind."""
    return {
        "name": "Learner",
        "prefix": "Abstract",
        "superclass": "sample_handlers.BaseClassifier",
        "author": "Jane Doe",
        "organization": "University of Waikato",
        "options": [
            {"property": "iterations", "type": "int", "default": "10", "help": "number of iterations."},
            {"property": "maxSteps", "type": "long", "default": "1000000", "help": "step limit."},
            {
                "property": "rate",
                "type": "float",
                "default": "0.5",
                "constraint": "value > 0",
                "help": "the learning rate.",
            },
            {"property": "label", "type": "string", "default": "'default label'", "help": "the label."},
            {"property": "modelFile", "type": "path", "default": "pathlib.Path('model.bin')", "help": "model file."},
            {"property": "normalize", "type": "boolean", "default": "False", "help": "normalize data."},
            {
                "property": "kernel",
                "type": "sample_handlers.Kernel",
                "default": "sample_handlers.GaussianKernel()",
                "help": "the kernel.",
            },
            {"property": "weights", "type": "double[]", "default": "[1.0, 2.0]", "help": "class weights."},
        ],
    }


@pytest.fixture
def config():
    """Generator configuration with a fixed copyright year."""
    return GeneratorConfig(copyright_year=2024)


@pytest.fixture
def generator(config):
    return PythonGenerator(config)


@pytest.fixture
def write_definition(tmp_path):
    """Factory writing a definition dict to a JSON file."""

    def _write(data, name=None):
        path = tmp_path / (name or f"{data.get('name', 'definition')}.json")
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def load_generated(tmp_path):
    """Factory writing generated code to tmp_path and importing it as a module."""
    counter = itertools.count()
    loaded = []

    def _load(code):
        module_name = f"generated_handler_{next(counter)}"
        path = tmp_path / f"{module_name}.py"
        path.write_text(code, encoding="utf-8")

        spec = importlib.util.spec_from_file_location(module_name, path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        loaded.append(module_name)
        spec.loader.exec_module(module)
        return module

    yield _load

    for module_name in loaded:
        sys.modules.pop(module_name, None)


@pytest.fixture
def compile_class(generator, load_generated):
    """Factory compiling a definition dict and returning the generated class."""

    def _compile(data):
        definition = convert_definition(data)
        module = load_generated(generator.generate(definition))
        return getattr(module, definition.class_name)

    return _compile
