"""Tests for the per-construct analyzers, in both grammars."""

from codegauge.analysis import collect_occurrences, analyze_boolean_operators, tokens
from codegauge.parser import ConstructKind, load_source


def _occurrences(text, language, kind):
    return collect_occurrences(load_source(text, language), kind)


class TestConditional:
    """if / else-if / else chains."""

    def test_python_if_elif_else(self):
        code = '''
if a:
    x()
elif b:
    y()
else:
    z()
'''
        [occ] = _occurrences(code, "python", ConstructKind.CONDITIONAL)
        assert occ.branch_count == 2
        assert occ.has_else
        assert occ.decision_points == 2
        assert (occ.start_line, occ.end_line) == (2, 7)
        assert occ.line_count == 6

    def test_chain_without_else_ends_at_last_clause(self):
        code = "if a:\n    x()\nelif b:\n    y()\n\nz()\n"
        [occ] = _occurrences(code, "python", ConstructKind.CONDITIONAL)
        assert occ.decision_points == 2
        assert not occ.has_else
        assert (occ.start_line, occ.end_line) == (1, 4)

    def test_python_plain_if(self):
        [occ] = _occurrences("if a:\n    x()\n", "python", ConstructKind.CONDITIONAL)
        assert occ.decision_points == 1
        assert not occ.has_else

    def test_java_else_if_chain_is_one_occurrence(self):
        code = '''
if (a) {
    x();
} else if (b) {
    y();
} else if (c) {
    w();
} else {
    z();
}
'''
        [occ] = _occurrences(code, "java", ConstructKind.CONDITIONAL)
        assert occ.branch_count == 3
        assert occ.has_else
        assert (occ.start_line, occ.end_line) == (2, 10)

    def test_nested_if_is_its_own_occurrence(self):
        code = '''
if a:
    if b:
        x()
'''
        occurrences = _occurrences(code, "python", ConstructKind.CONDITIONAL)
        assert len(occurrences) == 2
        assert sum(o.decision_points for o in occurrences) == 2


class TestLoops:
    """foreach, counted for and while loops."""

    def test_python_for_is_foreach(self):
        code = "for item in items:\n    process(item)\n"
        [occ] = _occurrences(code, "python", ConstructKind.FOREACH)
        assert occ.decision_points == 1
        assert occ.variable_text == "item"
        assert occ.condition_text == "items"
        assert (occ.start_line, occ.end_line) == (1, 2)

    def test_python_has_no_counted_for(self):
        code = "for i in range(3):\n    pass\n"
        assert _occurrences(code, "python", ConstructKind.FOR) == []

    def test_java_enhanced_for(self):
        code = "for (String name : names) {\n    greet(name);\n}\n"
        [occ] = _occurrences(code, "java", ConstructKind.FOREACH)
        assert occ.variable_text == "name"
        assert occ.condition_text == "names"

    def test_java_counted_for(self):
        code = "for (int i = 0; i < n; i++) {\n    step(i);\n}\n"
        [occ] = _occurrences(code, "java", ConstructKind.FOR)
        assert occ.decision_points == 1
        assert occ.condition_text == "i < n"
        assert occ.initializer_text == "int i = 0"
        assert occ.iterator_text == "i++"

    def test_java_for_without_condition_adds_nothing(self):
        code = "for (;;) {\n    spin();\n}\n"
        [occ] = _occurrences(code, "java", ConstructKind.FOR)
        assert occ.decision_points == 0
        assert occ.condition_text == ""

    def test_python_while(self):
        code = "while x > 0:\n    x -= 1\n"
        [occ] = _occurrences(code, "python", ConstructKind.WHILE)
        assert occ.decision_points == 1
        assert occ.condition_text == "x > 0"
        assert not occ.post_test

    def test_java_do_while_is_post_test(self):
        code = "do {\n    tick();\n} while (running);\n"
        [occ] = _occurrences(code, "java", ConstructKind.WHILE)
        assert occ.decision_points == 1
        assert occ.condition_text == "running"
        assert occ.post_test
        assert (occ.start_line, occ.end_line) == (1, 3)


class TestExceptionBlock:
    """try statements and their handlers."""

    def test_python_typed_and_bare_handlers(self):
        code = '''
try:
    risky()
except ValueError:
    handle()
except:
    fallback()
finally:
    cleanup()
'''
        [occ] = _occurrences(code, "python", ConstructKind.EXCEPTION_BLOCK)
        assert occ.catch_count == 2
        assert occ.catch_all_count == 1
        assert occ.typed_catch_count == 1
        assert occ.has_finally
        assert occ.decision_points == 2

    def test_python_try_finally_adds_nothing(self):
        code = "try:\n    risky()\nfinally:\n    cleanup()\n"
        [occ] = _occurrences(code, "python", ConstructKind.EXCEPTION_BLOCK)
        assert occ.decision_points == 0
        assert occ.has_finally

    def test_java_throwable_is_catch_all(self):
        code = '''
try {
    risky();
} catch (IOException e) {
    handle(e);
} catch (Throwable t) {
    fallback(t);
} finally {
    cleanup();
}
'''
        [occ] = _occurrences(code, "java", ConstructKind.EXCEPTION_BLOCK)
        assert occ.catch_count == 2
        assert occ.catch_all_count == 1
        assert occ.has_finally
        assert (occ.start_line, occ.end_line) == (2, 10)


class TestMultiWayBranch:
    """match and switch statements."""

    def test_python_match_with_wildcard(self):
        code = '''
match command:
    case "start":
        start()
    case "stop":
        stop()
    case _:
        idle()
'''
        [occ] = _occurrences(code, "python", ConstructKind.MULTI_WAY_BRANCH)
        assert occ.clause_count == 3
        assert occ.has_default
        assert occ.decision_points == 3

    def test_python_match_without_wildcard(self):
        code = "match x:\n    case 1:\n        one()\n"
        [occ] = _occurrences(code, "python", ConstructKind.MULTI_WAY_BRANCH)
        assert occ.clause_count == 1
        assert not occ.has_default

    def test_java_switch_counts_every_label(self):
        code = '''
switch (x) {
    case 1:
    case 2:
        low();
        break;
    default:
        other();
}
'''
        [occ] = _occurrences(code, "java", ConstructKind.MULTI_WAY_BRANCH)
        assert occ.clause_count == 3
        assert occ.has_default

    def test_java_switch_rules(self):
        code = "switch (x) {\n    case 1 -> one();\n    default -> other();\n}\n"
        [occ] = _occurrences(code, "java", ConstructKind.MULTI_WAY_BRANCH)
        assert occ.clause_count == 2
        assert occ.has_default


class TestTrap:
    """Exception-suppressing handlers."""

    def test_suppress_block(self):
        code = '''
with suppress(FileNotFoundError):
    os.remove(path)
'''
        [occ] = _occurrences(code, "python", ConstructKind.TRAP)
        assert occ.decision_points == 1
        assert occ.condition_type == "FileNotFoundError"
        assert (occ.start_line, occ.end_line) == (2, 3)

    def test_qualified_suppress(self):
        code = "with contextlib.suppress(KeyError, IndexError):\n    pop()\n"
        [occ] = _occurrences(code, "python", ConstructKind.TRAP)
        assert occ.condition_type == "KeyError, IndexError"

    def test_java_has_no_traps(self):
        code = "try { a(); } catch (Exception e) { }\n"
        assert _occurrences(code, "java", ConstructKind.TRAP) == []


class TestBooleanOperators:
    """Logical operator tallies."""

    def test_python_and_or(self):
        unit = load_source("ok = a and b or c and d\n", "python")
        total = analyze_boolean_operators(tokens(unit))
        assert (total.and_count, total.or_count, total.xor_count) == (2, 1, 0)
        assert total.count == 3

    def test_java_xor(self):
        unit = load_source("boolean r = (a && b) ^ c || d;\n", "java")
        total = analyze_boolean_operators(tokens(unit))
        assert (total.and_count, total.or_count, total.xor_count) == (1, 1, 1)

    def test_no_operators(self):
        total = analyze_boolean_operators([])
        assert total.count == 0
