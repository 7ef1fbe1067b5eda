"""Tests for scanner.checks.static_rules: line rules and summary counts."""

from scanner.checks.static_rules import analyze, RULES
from scanner.models import Finding, Severity


def _rules(result):
    return [f.rule for f in result.issues]


class TestDebugStatementRule:
    def test_console_log_detected(self):
        result = analyze('console.log("x")', "app.js")
        assert result.issues == [Finding(1, Severity.WARNING, "Debug statement found", "no-console")]

    def test_console_debug_and_info_detected(self):
        result = analyze('console.debug("a")\nconsole.info("b")', "app.js")
        assert _rules(result) == ["no-console", "no-console"]
        assert [f.line for f in result.issues] == [1, 2]

    def test_console_error_not_detected(self):
        result = analyze('console.error("boom")', "app.js")
        assert result.issues == []


class TestHardcodedSecretRule:
    def test_password_literal_detected(self, secret_code):
        result = analyze(secret_code, "config.py")
        assert len(result.issues) == 1
        finding = result.issues[0]
        assert finding.line == 1
        assert finding.severity == Severity.ERROR
        assert finding.rule == "no-hardcoded-secrets"
        assert finding.message == "Hardcoded secret detected"

    def test_api_key_variants_detected(self):
        for line in ['apiKey = "abc"', "api_key='abc'", 'API-KEY = "abc"', 'db_password="hunter2"']:
            result = analyze(line, "f.js")
            assert _rules(result) == ["no-hardcoded-secrets"], line

    def test_token_single_quotes_detected(self):
        result = analyze("const token = 'tok';", "f.js")
        assert _rules(result) == ["no-hardcoded-secrets"]

    def test_empty_literal_not_detected(self):
        result = analyze('password = ""', "f.py")
        assert result.issues == []

    def test_comparison_not_detected(self):
        result = analyze('if password == "x":', "f.py")
        assert result.issues == []

    def test_env_lookup_not_detected(self):
        result = analyze('password = os.environ["PASSWORD"]', "f.py")
        assert result.issues == []


class TestTodoCommentRule:
    def test_todo_detected(self):
        result = analyze("// TODO: fix", "f.js")
        assert result.issues == [Finding(1, Severity.INFO, "TODO comment found", "todo-comment")]

    def test_todo_is_case_insensitive(self):
        result = analyze("//todo later", "f.js")
        assert _rules(result) == ["todo-comment"]

    def test_todo_without_comment_marker_not_detected(self):
        result = analyze("TODO = 1", "f.js")
        assert result.issues == []


class TestRuleOrdering:
    def test_rule_priority_order(self):
        assert [rule_id for rule_id, _, _, _ in RULES] == [
            "no-console", "no-hardcoded-secrets", "todo-comment",
        ]

    def test_debug_and_secret_on_one_line(self):
        result = analyze('console.log(x); const secret = "s3cr3t";', "f.js")
        assert _rules(result) == ["no-console", "no-hardcoded-secrets"]
        assert all(f.line == 1 for f in result.issues)

    def test_all_three_rules_on_one_line(self, noisy_code):
        result = analyze(noisy_code, "f.js")
        first_line = [f.rule for f in result.issues if f.line == 1]
        assert first_line == ["no-console", "no-hardcoded-secrets", "todo-comment"]

    def test_findings_ascend_by_line(self, noisy_code):
        result = analyze(noisy_code, "f.js")
        lines = [f.line for f in result.issues]
        assert lines == sorted(lines)
        assert lines == [1, 1, 1, 2, 3, 4, 5]


class TestSummary:
    def test_debug_and_todo_summary(self, debug_and_todo_code):
        result = analyze(debug_and_todo_code, "app.js")
        assert [f.severity for f in result.issues] == [Severity.WARNING, Severity.INFO]
        assert (result.summary.total, result.summary.errors, result.summary.warnings) == (2, 0, 1)

    def test_secret_summary(self, secret_code):
        summary = analyze(secret_code, "config.py").summary
        assert (summary.total, summary.errors, summary.warnings) == (1, 1, 0)

    def test_noisy_summary(self, noisy_code):
        result = analyze(noisy_code, "f.js")
        assert result.summary.total == len(result.issues) == 7
        assert result.summary.errors == 2
        assert result.summary.warnings == 3
        assert result.summary.errors + result.summary.warnings <= result.summary.total

    def test_empty_code(self):
        result = analyze("", "empty.js")
        assert result.issues == []
        assert (result.summary.total, result.summary.errors, result.summary.warnings) == (0, 0, 0)

    def test_clean_code(self, clean_code):
        assert analyze(clean_code, "math.js").issues == []

    def test_analyze_is_deterministic(self, noisy_code):
        assert analyze(noisy_code, "f.js") == analyze(noisy_code, "f.js")

    def test_to_dict_uses_plain_values(self, secret_code):
        data = analyze(secret_code, "config.py").to_dict()
        assert data == {
            "issues": [{
                "line": 1,
                "severity": "error",
                "message": "Hardcoded secret detected",
                "rule": "no-hardcoded-secrets",
            }],
            "summary": {"total": 1, "errors": 1, "warnings": 0},
        }
