"""
optionhandler: option handler code generator and option codec.

``optionhandler.codec`` implements the option token protocol at runtime,
``optionhandler.codegen`` generates classes that use it.
"""

__version__ = "0.1.0"
