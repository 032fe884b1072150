"""Pipeline, tree printer, config and CLI tests."""

import json

import pytest

import dumbbrain
from dumbbrain.cli import main, repl_step
from dumbbrain.config import DumbBrainConfig, find_config, load_config
from dumbbrain.errors import CompileError, ErrorKind
from dumbbrain.lexer import tokenize
from dumbbrain.objects import Number, Boolean
from dumbbrain.pipeline import evaluate, run
from dumbbrain.tree_printer import format_node, render_tree


class TestPipeline:

    def test_package_exports_evaluate(self):
        assert dumbbrain.evaluate("2 * 21") == Number(42.0)

    def test_run_keeps_intermediate_results(self):
        result = run("1 + 1")
        assert result.ok
        assert len(result.tokens) == 5
        assert result.syntax is not None
        assert result.bound is not None
        assert result.value == Number(2.0)

    def test_run_stops_after_diagnostics(self):
        result = run("(1")
        assert not result.ok
        assert result.diagnostics == ["at 1:3: expected RightParenthesisToken"]
        assert result.bound is None
        assert result.value is None

    def test_evaluate_raises_on_diagnostics(self):
        with pytest.raises(CompileError) as exc_info:
            evaluate("(1")
        assert exc_info.value.kind is ErrorKind.SYNTAX_ERROR
        assert exc_info.value.errors[0].message == "at 1:3: expected RightParenthesisToken"

    def test_evaluate_raises_on_type_error(self):
        with pytest.raises(CompileError) as exc_info:
            evaluate("true + 1")
        assert exc_info.value.kind is ErrorKind.TYPE_ERROR

    @pytest.mark.parametrize("source", [
        "(" * 5000 + "1" + ")" * 5000,
        "-" * 5000 + "1",
        "1" + " + 1" * 5000,
    ])
    def test_deep_nesting_is_a_compile_error(self, source):
        with pytest.raises(CompileError) as exc_info:
            evaluate(source)
        assert exc_info.value.kind is ErrorKind.INTERNAL_ERROR
        assert exc_info.value.errors[0].message == "expression nested too deeply"

    def test_moderate_nesting_evaluates(self):
        assert evaluate("(" * 50 + "1" + ")" * 50) == Number(1.0)


class TestTreePrinter:

    def test_token_label_includes_value(self):
        assert format_node(tokenize("12")[0]) == "NumberToken 12"
        assert format_node(tokenize("+")[0]) == "PlusToken"

    def test_custom_root_label(self):
        expression = run("false").syntax
        assert render_tree(expression, "Expression") == (
            "Expression\n"
            "└─ LiteralExpression\n"
            "   └─ FalseKeyword false\n"
        )

    def test_missing_parenthesis_is_omitted(self):
        expression = run("(1").syntax
        assert render_tree(expression) == (
            "ParseTree\n"
            "└─ ParenthesizedExpression\n"
            "   ├─ LeftParenthesisToken\n"
            "   └─ LiteralExpression\n"
            "      └─ NumberToken 1\n"
        )


class TestConfig:

    def test_defaults_when_missing(self, tmp_path):
        config = load_config(str(tmp_path / "missing.json"))
        assert config == DumbBrainConfig()

    def test_find_and_load(self, tmp_path):
        (tmp_path / ".dumbbrainrc.json").write_text(json.dumps({
            "prompt": "db> ",
            "show_tree": True,
            "format": "json",
            "log_level": "debug",
            "unknown": 1,
        }))
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(str(nested)) == str(tmp_path / ".dumbbrainrc.json")
        config = load_config(start_dir=str(nested))
        assert config.prompt == "db> "
        assert config.show_tree is True
        assert config.show_tokens is False
        assert config.format == "json"
        assert config.log_level == "DEBUG"

    def test_unknown_log_level_keeps_default(self, tmp_path):
        path = tmp_path / ".dumbbrainrc.json"
        path.write_text(json.dumps({"log_level": "LOUD", "prompt": "db> "}))
        config = load_config(str(path))
        assert config.log_level == "WARNING"
        assert config.prompt == "db> "

    def test_log_level_is_case_insensitive(self, tmp_path):
        path = tmp_path / ".dumbbrainrc.json"
        path.write_text(json.dumps({"log_level": "info"}))
        assert load_config(str(path)).log_level == "INFO"

    def test_malformed_json_gives_defaults(self, tmp_path):
        path = tmp_path / "dumbbrain.config.json"
        path.write_text("{not json")
        assert load_config(str(path)) == DumbBrainConfig()


class TestCLI:

    def test_eval(self, capsys):
        assert main(["eval", "1 + 2"]) == 0
        assert capsys.readouterr().out == "3\n"

    def test_eval_type_error(self, capsys):
        assert main(["eval", "true + 1"]) == 1
        assert "unexpected types for Add: Boolean, Number" in capsys.readouterr().out

    def test_eval_json(self, capsys):
        assert main(["--format", "json", "eval", "1 < 2"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload == {"diagnostics": [], "value": {"type": "Boolean", "value": True}}

    def test_eval_json_infinity_is_valid_json(self, capsys):
        assert main(["--format", "json", "eval", "1 / 0"]) == 0
        out = capsys.readouterr().out
        assert "Infinity" not in out
        payload = json.loads(out)
        assert payload["value"] == {"type": "Number", "value": "inf"}

    def test_eval_from_file(self, tmp_path, capsys):
        source = tmp_path / "expr.db"
        source.write_text("(5 + 6) * 3 > 2 + 4 == true\n")
        assert main(["eval", "--file", str(source)]) == 0
        assert capsys.readouterr().out == "true\n"

    def test_tree(self, capsys):
        assert main(["tree", "-1"]) == 0
        assert capsys.readouterr().out == (
            "ParseTree\n"
            "└─ UnaryExpression\n"
            "   ├─ MinusToken\n"
            "   └─ LiteralExpression\n"
            "      └─ NumberToken 1\n"
        )

    def test_tree_reports_diagnostics(self, capsys):
        assert main(["tree", "(1"]) == 1
        assert "at 1:3: expected RightParenthesisToken" in capsys.readouterr().out

    def test_tokens_json(self, capsys):
        assert main(["--format", "json", "tokens", "1 +"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert [t["kind"] for t in payload] == ["NumberToken", "WhitespaceToken", "PlusToken"]
        assert payload[0]["value"] == {"type": "Number", "value": 1.0}
        assert payload[2]["span"] == [1, 3, 1, 4]

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1

    def test_repl_step(self):
        config = DumbBrainConfig()
        assert repl_step("2 * 3", config) == ("6", False)
        output, failed = repl_step("1 +", config)
        assert failed
        assert "expected NumberToken" in output

    def test_repl_step_with_tree(self):
        config = DumbBrainConfig(show_tree=True)
        output, failed = repl_step("7", config)
        assert not failed
        assert output == (
            "Expression\n"
            "└─ LiteralExpression\n"
            "   └─ NumberToken 7\n"
            "7"
        )

    def test_repl_step_survives_deep_nesting(self):
        output, failed = repl_step("-" * 5000 + "1", DumbBrainConfig())
        assert failed
        assert "expression nested too deeply" in output

    def test_tree_deep_nesting(self, capsys):
        assert main(["tree", "(" * 5000 + "1" + ")" * 5000]) == 1
        assert "expression nested too deeply" in capsys.readouterr().out

    def test_repl_loop(self, monkeypatch, capsys):
        lines = iter(["1 + 1", "", "true < false", ":quit"])
        monkeypatch.setattr("builtins.input", lambda prompt: next(lines))
        assert main(["repl"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "2"
        assert "cannot perform comparison Less" in out[1]

    def test_repl_exits_on_eof(self, monkeypatch):
        def eof(prompt):
            raise EOFError
        monkeypatch.setattr("builtins.input", eof)
        assert main(["repl"]) == 0
