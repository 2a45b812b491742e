import pytest

from journal_reporter.core.errors import TemplateError
from journal_reporter.problem.data import ProblemData
from journal_reporter.problem.formatter import DEFAULT_TEMPLATE, ProblemFormatter, expand


def test_default_template_has_summary_only(problem_data):
    report = ProblemFormatter.default().generate_report(problem_data)
    assert report.summary == "true killed by SIGSEGV"
    assert report.description is None
    assert DEFAULT_TEMPLATE == "%summary:: %reason%\n"


def test_missing_placeholder_renders_empty():
    assert expand("[%component%] crashed", ProblemData()) == "[] crashed"


def test_optional_group_dropped_when_element_missing(problem_data):
    assert expand("[[%pkg_name% ]]%reason%", problem_data) == "true killed by SIGSEGV"
    problem_data.add_text("pkg_name", "coreutils")
    assert expand("[[%pkg_name% ]]%reason%", problem_data) == "coreutils true killed by SIGSEGV"


def test_binary_element_is_not_substituted(problem_data):
    assert expand("core: %coredump%", problem_data) == "core: "


def test_sections_and_class_macros(problem_data):
    problem_data.add_text("component", "coreutils")
    template = (
        "%summary:: [%pid%] %reason%\n"
        "Process:: executable,cmdline\n"
        "Other:: %oneline,-uid\n"
        "Traces:: %multiline\n"
        "Files:: %binary\n"
    )
    report = ProblemFormatter.from_string(template).generate_report(problem_data)
    assert report.summary == "[4242] true killed by SIGSEGV"
    assert report.description == (
        "Process:\n"
        "executable: /usr/bin/true\n"
        "cmdline: true --help\n"
        "Other:\n"
        "component: coreutils\n"
        "Traces:\n"
        "backtrace:\n"
        "#0 main\n"
        "#1 __libc_start_main\n"
        "Files:\n"
        "coredump: binary file /tmp/problem/coredump"
    )


def test_empty_sections_are_omitted(problem_data):
    template = "%summary:: %reason%\nMissing:: component,type\n"
    report = ProblemFormatter.from_string(template).generate_report(problem_data)
    assert report.description is None


def test_free_text_and_reporter(problem_data):
    template = "%summary:: crash\nUser %uid% hit a crash.\n\nMeta:: %reporter\n# comment line\n"
    report = ProblemFormatter.from_string(template).generate_report(problem_data)
    assert report.description == "User 1000 hit a crash.\n\nMeta:\nreporter: journal-reporter"


def test_template_without_summary():
    with pytest.raises(TemplateError):
        ProblemFormatter.from_string("Section:: reason\n")


def test_duplicate_summary():
    with pytest.raises(TemplateError):
        ProblemFormatter.from_string("%summary:: a\n%summary:: b\n")


def test_unknown_special_section():
    with pytest.raises(TemplateError):
        ProblemFormatter.from_string("%summary:: a\n%attach:: coredump\n")


def test_invalid_item():
    with pytest.raises(TemplateError):
        ProblemFormatter.from_string("%summary:: a\nSection:: %bogus\n")


def test_from_file(tmp_path, problem_data):
    path = tmp_path / "journal.conf"
    path.write_text("%summary:: %executable% crashed\n")
    report = ProblemFormatter.from_file(path).generate_report(problem_data)
    assert report.summary == "/usr/bin/true crashed"


def test_from_missing_file(tmp_path):
    with pytest.raises(TemplateError):
        ProblemFormatter.from_file(tmp_path / "missing.conf")
