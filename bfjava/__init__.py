from .bf_interpreter import BrainfuckInterpreter, RuntimeFault, StepLimitExceeded
from .driver import CompileResult, compile_java
from .errors import BfJavaError, MissingSource, ToolchainError, UnmatchedBrackets, UsageError
from .files import read_source, write_java_source
from .transpiler import JavaTranspiler, Operator, Translation, normalize, translate
from .wrapper import JavaWrapper, class_name_from

__all__ = [
    "BfJavaError",
    "BrainfuckInterpreter",
    "CompileResult",
    "JavaTranspiler",
    "JavaWrapper",
    "MissingSource",
    "Operator",
    "RuntimeFault",
    "StepLimitExceeded",
    "ToolchainError",
    "Translation",
    "UnmatchedBrackets",
    "UsageError",
    "class_name_from",
    "compile_java",
    "normalize",
    "read_source",
    "translate",
    "write_java_source",
]
