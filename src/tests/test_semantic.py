# src/tests/test_semantic.py
from minicompiler.lexical import tokenize_document
from minicompiler.semantic import SemanticChecker, analyze, check_semantics


def _tokens(code: str):
    doc = tokenize_document(code)
    assert doc.ok, doc.errors
    return doc.tokens


def _check(code: str) -> list:
    return check_semantics(_tokens(code))


class TestScenarios:
    def test_clean_declaration(self):
        assert _check("int x = 5;") == []

    def test_string_to_int(self):
        assert _check('int x = "hello";') == [
            "Type error: cannot assign string to int variable 'x' (line 1)."
        ]

    def test_assigned_before_declaration(self):
        assert _check("y = 10;") == ["Variable 'y' assigned before declaration (line 1)."]

    def test_unused_declaration(self):
        assert _check("int count;") == ["Warning: variable 'count' declared at line 1 but not used."]


class TestTypes:
    def test_string_to_string_is_fine(self):
        assert _check('String s = "a";') == []

    def test_only_int_is_checked(self):
        assert _check('float f = "x";\ndouble d = "y";') == []

    def test_type_error_on_later_line(self):
        assert _check('int x;\nx = "s";') == [
            "Type error: cannot assign string to int variable 'x' (line 2)."
        ]

    def test_type_error_reports_rhs_line(self):
        assert _check('int x =\n"s";') == [
            "Type error: cannot assign string to int variable 'x' (line 2)."
        ]

    def test_identifier_rhs_is_not_checked(self):
        assert _check('String s = "a";\nint x = s;') == []


class TestDeclarations:
    def test_redeclaration_overwrites_type(self):
        assert _check('int x;\nString x;\nx = "a";') == []

    def test_redeclaration_overwrites_line(self):
        assert _check("int a;\nfloat a;") == ["Warning: variable 'a' declared at line 2 but not used."]

    def test_declaration_after_use_still_counts(self):
        # la tabla se construye completa antes de revisar usos
        assert _check("y = 1;\nint y;") == []

    def test_read_marks_used(self):
        assert _check("int a;\nint b;\nb = a;") == []

    def test_unknown_read_is_ignored(self):
        assert _check("int a;\na = b;") == []

    def test_unused_warnings_as_set(self):
        assert set(_check("int a;\nint b;\nint c;\nc = 1;")) == {
            "Warning: variable 'a' declared at line 1 but not used.",
            "Warning: variable 'b' declared at line 2 but not used.",
        }

    def test_declaration_alone_is_not_a_use(self):
        assert set(_check("int a;\nfloat b;\nString c;")) == {
            "Warning: variable 'a' declared at line 1 but not used.",
            "Warning: variable 'b' declared at line 2 but not used.",
            "Warning: variable 'c' declared at line 3 but not used.",
        }

    def test_initialized_declaration_counts_as_use(self):
        assert _check("int x = 5;\nfloat y = x;") == []

    def test_any_keyword_declares(self):
        assert _check("int x = 1;\nreturn x;") == []


class TestBounds:
    def test_assignment_at_end_of_stream(self):
        assert _check("x =") == ["Variable 'x' assigned before declaration (line 1)."]

    def test_declared_assignment_at_end_of_stream(self):
        assert _check("int x =") == []

    def test_keyword_at_end_of_stream(self):
        assert _check("int") == []

    def test_empty_stream(self):
        assert check_semantics([]) == []


class TestChecker:
    def test_messages_in_detection_order(self):
        msgs = _check('z = 1;\nint x = "s";\nint unused;')
        assert msgs == [
            "Variable 'z' assigned before declaration (line 1).",
            "Type error: cannot assign string to int variable 'x' (line 2).",
            "Warning: variable 'unused' declared at line 3 but not used.",
        ]

    def test_not_deduplicated(self):
        assert _check("y = 1;\ny = 2;") == [
            "Variable 'y' assigned before declaration (line 1).",
            "Variable 'y' assigned before declaration (line 2).",
        ]

    def test_rerun_is_idempotent(self):
        tokens = _tokens('int x = "s";\nint y;')
        checker = SemanticChecker()
        assert checker.check(tokens) == checker.check(tokens)

    def test_fresh_table_per_run(self):
        checker = SemanticChecker()
        checker.check(_tokens("int a;"))
        assert checker.check(_tokens("a = 1;")) == ["Variable 'a' assigned before declaration (line 1)."]

    def test_analyze_payload(self):
        res = analyze(_tokens('int x = "s";\nint y;'))
        assert res["symbols"] == [
            {"name": "x", "type": "int", "line": 1, "used": True},
            {"name": "y", "type": "int", "line": 2, "used": False},
        ]
        assert [e["code"] for e in res["errors"]] == ["E101", "W001"]
        assert res["errors"][0]["phase"] == "semantic"
