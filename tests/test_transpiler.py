import random
import unittest

from bfjava import (
    BrainfuckInterpreter,
    JavaTranspiler,
    JavaWrapper,
    Operator,
    UnmatchedBrackets,
    UsageError,
    class_name_from,
    normalize,
    translate,
)
from bfjava.bf_interpreter import (
    InputExhausted,
    InputMismatch,
    StepLimitExceeded,
    TapeIndexError,
)
from bfjava.transpiler import OPERATOR_CHARS, TRANSLATIONS, is_balanced, parse_program


class NormalizerTests(unittest.TestCase):
    def test_strips_comments_and_whitespace(self) -> None:
        self.assertEqual(normalize("  + hello + "), "++")

    def test_keeps_all_operators_in_order(self) -> None:
        self.assertEqual(normalize("a>b<c+d-e.f,g[h]i"), "><+-.,[]")

    def test_empty_input(self) -> None:
        self.assertEqual(normalize(""), "")

    def test_only_comments(self) -> None:
        self.assertEqual(normalize("no operators here!\n\t"), "")

    def test_non_ascii_is_discarded(self) -> None:
        self.assertEqual(normalize("é+ü→-★"), "+-")

    def test_output_alphabet_and_idempotence(self) -> None:
        rng = random.Random(1234)
        alphabet = "><+-.,[]abc 123\n#é"
        for _ in range(200):
            source = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 40)))
            normalized = normalize(source)
            self.assertTrue(set(normalized) <= OPERATOR_CHARS)
            self.assertEqual(normalize(normalized), normalized)

    def test_parse_program_yields_operators(self) -> None:
        program = parse_program("x[-]y")
        self.assertEqual(
            program, [Operator.LOOP_OPEN, Operator.CELL_DEC, Operator.LOOP_CLOSE]
        )


class TranslatorTests(unittest.TestCase):
    def test_translation_table(self) -> None:
        expected = {
            ">": "ptr++;\n",
            "<": "ptr--;\n",
            "+": "mem[ptr]++;\n",
            "-": "mem[ptr]--;\n",
            ".": "System.out.print(mem[ptr]);\n",
            ",": "mem[ptr] = iostream.nextByte();\n",
            "[": "while(mem[ptr] != 0) {\n",
            "]": "}\n",
        }
        for char, fragment in expected.items():
            with self.subTest(operator=char):
                self.assertEqual(Operator(char).fragment, fragment)
        self.assertEqual(len(set(TRANSLATIONS.values())), len(TRANSLATIONS))

    def test_increment_and_print(self) -> None:
        body = translate("++.")
        self.assertEqual(
            body,
            "mem[ptr]++;\nmem[ptr]++;\nSystem.out.print(mem[ptr]);\n",
        )

    def test_input_and_print(self) -> None:
        body = translate(",.")
        self.assertEqual(
            body,
            "mem[ptr] = iostream.nextByte();\nSystem.out.print(mem[ptr]);\n",
        )

    def test_loop_program_emits_one_line_per_operator(self) -> None:
        program = "++[>+<-]>."
        body = translate(program)
        lines = body.splitlines()
        self.assertEqual(len(lines), 10)
        self.assertEqual(lines[2], "while(mem[ptr] != 0) {")
        self.assertEqual(lines[7], "}")

    def test_accepts_operator_sequence(self) -> None:
        body = translate([Operator.PTR_INC, Operator.PTR_DEC])
        self.assertEqual(body, "ptr++;\nptr--;\n")

    def test_empty_program(self) -> None:
        self.assertEqual(translate(""), "")

    def test_matched_brackets_only(self) -> None:
        self.assertEqual(translate("[]"), "while(mem[ptr] != 0) {\n}\n")
        self.assertEqual(len(translate("[[]]").splitlines()), 4)

    def test_deep_nesting(self) -> None:
        depth = 5000
        body = translate("[" * depth + "]" * depth)
        self.assertEqual(body.count("\n"), depth * 2)

    def test_close_before_open_fails_immediately(self) -> None:
        with self.assertRaises(UnmatchedBrackets) as ctx:
            translate("][")
        self.assertEqual(ctx.exception.position, 0)
        self.assertEqual(ctx.exception.depth, -1)

    def test_unclosed_loops_fail(self) -> None:
        with self.assertRaises(UnmatchedBrackets) as ctx:
            translate("[[")
        self.assertIsNone(ctx.exception.position)
        self.assertEqual(ctx.exception.depth, 2)

    def test_single_brackets_fail(self) -> None:
        for program in ("[", "]", "+[[-]", "[-]]+"):
            with self.subTest(program=program):
                with self.assertRaises(UnmatchedBrackets):
                    translate(program)

    def test_diagnostic_text(self) -> None:
        with self.assertRaises(UnmatchedBrackets) as ctx:
            translate("]")
        self.assertEqual(
            ctx.exception.diagnostic,
            "Error: Unmatched square braces.\nCannot continue.  Please review source.",
        )

    def test_success_iff_prefix_counts_hold(self) -> None:
        rng = random.Random(42)
        for _ in range(300):
            program = "".join(rng.choice("[]+") for _ in range(rng.randint(0, 12)))
            depth = 0
            expected = True
            for char in program:
                depth += {"[": 1, "]": -1}.get(char, 0)
                if depth < 0:
                    expected = False
                    break
            expected = expected and depth == 0
            with self.subTest(program=program):
                self.assertEqual(is_balanced(program), expected)
                if expected:
                    self.assertEqual(translate(program).count("\n"), len(program))

    def test_body_determines_program(self) -> None:
        reverse = {fragment.strip(): op.value for op, fragment in TRANSLATIONS.items()}
        program = ",[>++<-]>.<<+-"
        body = translate(program)
        recovered = "".join(reverse[line.strip()] for line in body.splitlines())
        self.assertEqual(recovered, program)


class WrapperTests(unittest.TestCase):
    def test_class_name_from_stem(self) -> None:
        self.assertEqual(class_name_from("bf.java"), "bf")
        self.assertEqual(class_name_from("Hello.tar.java"), "Hello")
        self.assertEqual(class_name_from("out/dir.v2/Main.java"), "Main")
        self.assertEqual(class_name_from("Program"), "Program")

    def test_empty_stem_is_rejected(self) -> None:
        with self.assertRaises(UsageError):
            class_name_from(".java")

    def test_prologue_and_epilogue(self) -> None:
        wrapper = JavaWrapper.for_output("Hello.java")
        self.assertEqual(
            wrapper.prologue(),
            "import java.util.Scanner;\n"
            "public class Hello {\n"
            "public static void main(String[] args) {\n"
            "byte[] mem = new byte[30000];\n"
            "Scanner iostream = new Scanner(System.in);\n"
            "int ptr = 0;\n",
        )
        self.assertEqual(wrapper.epilogue(), "iostream.close();\n}\n}\n")

    def test_same_stem_gives_identical_wrapper(self) -> None:
        first = JavaWrapper.for_output("Prog.java")
        second = JavaWrapper.for_output("elsewhere/Prog.txt")
        self.assertEqual(first.prologue(), second.prologue())
        self.assertEqual(first.epilogue(), second.epilogue())

    def test_explicit_class_name(self) -> None:
        wrapper = JavaWrapper.for_output("bf.java", class_name="Custom")
        self.assertIn("public class Custom {", wrapper.prologue())

    def test_blank_class_name_is_rejected(self) -> None:
        for name in ("", "   "):
            with self.subTest(name=name):
                with self.assertRaises(UsageError):
                    JavaWrapper.for_output("bf.java", class_name=name)


class JavaTranspilerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.transpiler = JavaTranspiler()

    def test_empty_source_produces_scaffold(self) -> None:
        source = self.transpiler.transpile("just a comment", "Empty.java")
        wrapper = JavaWrapper("Empty")
        self.assertEqual(source, wrapper.prologue() + wrapper.epilogue())

    def test_translation_record(self) -> None:
        translation = self.transpiler.translate_source("  + hello + ", "Two.java")
        self.assertEqual(translation.class_name, "Two")
        self.assertEqual(translation.normalized, "++")
        self.assertEqual(translation.body, "mem[ptr]++;\nmem[ptr]++;\n")
        self.assertEqual(translation.line_count, 2)
        self.assertTrue(translation.source.endswith("mem[ptr]++;\niostream.close();\n}\n}\n"))

    def test_unmatched_brackets_propagate(self) -> None:
        with self.assertRaises(UnmatchedBrackets):
            self.transpiler.transpile("[")

    def test_fixed_wrapper_overrides_output_name(self) -> None:
        transpiler = JavaTranspiler(JavaWrapper("Fixed"))
        translation = transpiler.translate_source("+", "Other.java")
        self.assertEqual(translation.class_name, "Fixed")


class BrainfuckInterpreterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.interpreter = BrainfuckInterpreter()

    def test_increment_and_print(self) -> None:
        self.assertEqual(self.interpreter.run("++."), "2")

    def test_echo_input(self) -> None:
        self.assertEqual(self.interpreter.run(",.", input_text="65\n"), "65")

    def test_loop_moves_value(self) -> None:
        self.assertEqual(self.interpreter.run("++[>+<-]>."), "2")

    def test_no_output_program(self) -> None:
        self.assertEqual(self.interpreter.run("  + hello + "), "")

    def test_outputs_have_no_separator(self) -> None:
        self.assertEqual(self.interpreter.run("+.+.-------------."), "12-11")

    def test_signed_byte_wraparound(self) -> None:
        self.assertEqual(self.interpreter.run("-."), "-1")
        self.assertEqual(self.interpreter.run("+" * 128 + "."), "-128")
        self.assertEqual(self.interpreter.run(",+.", input_text="127"), "-128")

    def test_negative_input(self) -> None:
        self.assertEqual(self.interpreter.run(",.,.", input_text="-5 +7"), "-57")

    def test_missing_input(self) -> None:
        with self.assertRaises(InputExhausted):
            self.interpreter.run(",")

    def test_bad_input(self) -> None:
        for text in ("A", "128", "-129", "1.5"):
            with self.subTest(text=text):
                with self.assertRaises(InputMismatch):
                    self.interpreter.run(",", input_text=text)

    def test_pointer_checked_only_on_access(self) -> None:
        self.assertEqual(self.interpreter.run("<>+."), "1")
        with self.assertRaises(TapeIndexError):
            self.interpreter.run("<+")

    def test_step_limit_exceeded(self) -> None:
        with self.assertRaises(StepLimitExceeded):
            self.interpreter.run("+[]", max_steps=10)

    def test_unbalanced_program_rejected(self) -> None:
        with self.assertRaises(UnmatchedBrackets):
            self.interpreter.run("+]")


if __name__ == "__main__":
    unittest.main()
