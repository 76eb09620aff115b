"""Code generation domain exports."""

from .generated_code import (
    CodeGenerator,
    GeneratedCode,
    GeneratedTest,
    ParallelSuiteCode,
    SequentialSuiteCode,
    SuiteCode,
    parse_generated_code,
)
from .generator_process import ProcessOutput, SubprocessCodeGenerator

__all__ = [
    "CodeGenerator",
    "GeneratedCode",
    "GeneratedTest",
    "ParallelSuiteCode",
    "SequentialSuiteCode",
    "SuiteCode",
    "parse_generated_code",
    "ProcessOutput",
    "SubprocessCodeGenerator",
]
