from stunt.compiler import compile_source
from stunt.compiler.errors import ErrorCode, Severity
from stunt.core.source import SourceFile


def compile_text(text, **kwargs):
    return compile_source(SourceFile("prog.st", text), **kwargs)


def test_successful_compile():
    result = compile_text("let a = 1;\na;")

    assert result.ok
    assert result.diagnostics == []
    assert result.output == "let a = 1;\na;\n"
    assert result.tokens[-1].type.value == "EOF"


def test_scan_errors_stop_before_parsing():
    result = compile_text("let a = @;")

    assert not result.ok
    assert result.program is None
    assert result.output is None
    assert [d.code for d in result.diagnostics] == [ErrorCode.UNEXPECTED_CHARACTER]


def test_parse_errors_stop_before_analysis():
    result = compile_text("let a = ;\nmissing;")

    assert result.program is not None
    assert result.output is None
    assert [d.code for d in result.errors] == [ErrorCode.EXPECTED_EXPRESSION]


def test_analysis_errors_prevent_output():
    result = compile_text("missing;")

    assert result.output is None
    assert [d.code for d in result.errors] == [ErrorCode.UNDEFINED_VARIABLE]


def test_warnings_still_produce_output():
    result = compile_text("let a = 1;")

    assert result.ok
    assert [d.code for d in result.warnings] == [ErrorCode.UNUSED_VARIABLE]
    assert result.output == "let a = 1;\n"


def test_warnings_as_errors():
    result = compile_text("let a = 1;", warnings_as_errors=True)

    assert not result.ok
    assert result.output is None
    assert result.diagnostics[0].severity is Severity.ERROR


def test_indent_is_forwarded():
    result = compile_text("{ 1; }", indent=4)
    assert result.output == "{\n    1;\n}\n"
