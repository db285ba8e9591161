# =============================================================================
# test_codegen.py - Code Generator Tests
# =============================================================================
# Tests for the two-pass Hack code generator.
#
# Test coverage includes:
#   - A- and C-instruction encoding against the ISA tables
#   - Label binding in pass 1 (forward references, stacked labels)
#   - Symbol resolution order and variable allocation
#   - Address literal range checking
#   - Error conditions for hand-built instructions
# =============================================================================

import pytest
from hack_asm.assembler.codegen import (
    CodeGenerator,
    assemble,
    encode_address,
    encode_compute,
)
from hack_asm.assembler.parser import Address, Compute, Label, parse_line, parse_source
from hack_asm.cpu import (
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    InstructionKind,
    classify_word,
    format_word,
)
from hack_asm.errors import (
    AssembleError,
    BadAddressLiteralError,
    DuplicateLabelError,
    SymbolTableFullError,
    UnknownMnemonicError,
)


# =============================================================================
# Helper Function
# =============================================================================

def assemble_lines(*lines: str) -> list[str]:
    """Assemble instruction lines and return the words as binary strings."""
    return [format_word(w) for w in assemble(parse_line(line) for line in lines)]


# =============================================================================
# Known Encodings
# =============================================================================

class TestKnownEncodings:
    """Words checked against hand-encoded reference values."""

    def test_address_256(self):
        assert assemble_lines("@256") == ["0000000100000000"]

    def test_d_equals_a(self):
        assert assemble_lines("D=A") == ["1110110000010000"]

    def test_unconditional_jump(self):
        assert assemble_lines("0;JMP") == ["1110101010000111"]

    def test_decrement_memory(self):
        assert assemble_lines("M=M-1") == ["1111110010001000"]

    def test_add_program(self):
        words = assemble(parse_source("@2\nD=A\n@3\nD=D+A\n@0\nM=D\n"))
        assert words == [2, 0xEC10, 3, 0xE090, 0, 0xE308]

    def test_dest_and_jump_together(self):
        assert assemble_lines("AM=M+1;JGT") == ["1111110111101001"]


# =============================================================================
# Table-Driven Encoding
# =============================================================================

class TestComputeEncoding:
    """Every table entry encodes into its field."""

    @pytest.mark.parametrize("comp", sorted(COMP_TABLE))
    def test_comp_field(self, comp):
        word = encode_compute(Compute(None, comp))
        assert word == 0b111 << 13 | COMP_TABLE[comp] << 6

    @pytest.mark.parametrize("dest", sorted(DEST_TABLE))
    def test_dest_field(self, dest):
        word = encode_compute(Compute(dest, "0"))
        assert (word >> 3) & 0b111 == DEST_TABLE[dest]

    @pytest.mark.parametrize("jump", sorted(JUMP_TABLE))
    def test_jump_field(self, jump):
        word = encode_compute(Compute(None, "0", jump))
        assert word & 0b111 == JUMP_TABLE[jump]

    def test_adm_equals_amd(self):
        assert encode_compute(Compute("ADM", "D")) == encode_compute(Compute("AMD", "D"))
        assert assemble_lines("ADM=D") == assemble_lines("AMD=D")

    def test_parsed_matches_direct(self):
        """Parsing the canonical spelling and encoding agrees with the tables."""
        inst = Compute("MD", "D|M", "JLE")
        assert assemble([parse_line(inst.text)]) == [encode_compute(inst)]


class TestUnknownMnemonics:
    """Hand-built records with mnemonics outside the tables."""

    def test_unknown_dest(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            encode_compute(Compute("X", "0"))
        assert exc_info.value.field_name == "dest"
        assert exc_info.value.mnemonic == "X"

    def test_unknown_comp(self):
        with pytest.raises(UnknownMnemonicError, match="unknown comp mnemonic 'D\\*A'"):
            assemble([Compute("D", "D*A")])

    def test_unknown_jump(self):
        with pytest.raises(UnknownMnemonicError, match="jump"):
            assemble([Compute(None, "0", "JXX")])

    def test_is_assemble_error(self):
        with pytest.raises(AssembleError):
            assemble([Compute(None, "Q")])


# =============================================================================
# Address Literals
# =============================================================================

class TestAddressLiterals:
    """Test numeric A-instruction range checking."""

    def test_zero(self):
        assert assemble([Address("0")]) == [0x0000]

    def test_max(self):
        assert assemble([Address("32767")]) == [0x7FFF]

    def test_too_large(self):
        with pytest.raises(BadAddressLiteralError) as exc_info:
            assemble([Address("32768")])
        assert exc_info.value.literal == "32768"

    def test_negative(self):
        with pytest.raises(BadAddressLiteralError):
            assemble([parse_line("@-1")])

    def test_leading_zeros(self):
        assert assemble([Address("007")]) == [7]

    def test_encode_address_range(self):
        assert encode_address(100) == 100
        with pytest.raises(BadAddressLiteralError):
            encode_address(1 << 15)

    def test_huge_literal(self):
        """Literals with thousands of digits are rejected, not converted."""
        literal = "9" * 5000
        with pytest.raises(BadAddressLiteralError) as exc_info:
            assemble([parse_line("@" + literal)])
        assert exc_info.value.literal == literal

    def test_huge_negative_literal(self):
        with pytest.raises(BadAddressLiteralError):
            assemble([Address("-" + "1" * 5000)])

    def test_leading_zeros_long_literal(self):
        """Zero padding does not count towards the digit limit."""
        assert assemble([Address("0" * 5000 + "32767")]) == [0x7FFF]

    def test_six_digit_literal(self):
        with pytest.raises(BadAddressLiteralError):
            assemble([Address("100000")])

    def test_failed_run_emits_nothing(self):
        codegen = CodeGenerator()
        with pytest.raises(BadAddressLiteralError):
            codegen.generate([Address("x"), Address("32768")])
        assert codegen.get_words() == []
        assert codegen.get_emitted() == []
        assert codegen.get_variables() == {}

    def test_error_location_from_source(self):
        with pytest.raises(BadAddressLiteralError) as exc_info:
            assemble(parse_source("@1\n@99999\n", "big.asm"))
        assert str(exc_info.value).startswith("big.asm:2:1: error: address literal 99999")


# =============================================================================
# Labels (Pass 1)
# =============================================================================

class TestLabels:
    """Test label binding and references."""

    def test_label_at_top_binds_zero(self):
        codegen = CodeGenerator()
        codegen.generate([Label("START"), Address("START")])
        assert codegen.get_labels() == {"START": 0}
        assert codegen.get_words() == [0]

    def test_forward_reference(self):
        source = """
@R0
D=M
@END
D;JEQ
@R1
D=M
(END)
"""
        words = assemble(parse_source(source))
        assert len(words) == 6
        assert format_word(words[2]) == "0000000000000110"

    def test_stacked_labels(self):
        codegen = CodeGenerator()
        codegen.generate([Address("1"), Label("A"), Label("B"), Compute(None, "0", "JMP")])
        assert codegen.get_labels() == {"A": 1, "B": 1}

    def test_labels_emit_nothing(self):
        words = assemble([Label("X"), Compute("D", "A"), Label("Y")])
        assert len(words) == 1

    def test_label_insertion_preserves_words(self):
        """Adding an unused label does not change the output."""
        plain = [Address("5"), Compute("D", "A"), Address("0"), Compute("M", "D")]
        labelled = [Address("5"), Label("MID"), Compute("D", "A"),
                    Address("0"), Compute("M", "D"), Label("TAIL")]
        assert assemble(plain) == assemble(labelled)

    def test_backward_loop(self):
        words = assemble(parse_source("(LOOP)\n@LOOP\n0;JMP\n"))
        assert words == [0, 0b1110101010000111]

    def test_duplicate_label(self):
        with pytest.raises(DuplicateLabelError, match="duplicate label 'X'"):
            assemble([Label("X"), Compute("D", "A"), Label("X")])

    def test_label_wins_over_variable(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source("@DONE\n0;JMP\n(DONE)\n@DONE\n"))
        assert codegen.get_words()[0] == 2
        assert codegen.get_variables() == {}


# =============================================================================
# Variables (Pass 2)
# =============================================================================

class TestVariables:
    """Test variable allocation during encoding."""

    def test_variable_reuse(self):
        words = assemble_lines("@i", "M=0", "@i", "D=M")
        assert len(words) == 4
        assert words[0] == "0000000000010000"
        assert words[2] == "0000000000010000"

    def test_allocation_order(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source("@x\n@y\n@x\n@z\n"))
        assert codegen.get_variables() == {"x": 16, "y": 17, "z": 18}
        assert codegen.get_words() == [16, 17, 16, 18]

    def test_predefined_not_allocated(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source("@SCREEN\n@R15\n@n\n"))
        assert codegen.get_words() == [16384, 15, 16]

    def test_exhaustion(self):
        instructions = [Address(f"v{i}") for i in range(16384 - 16 + 1)]
        with pytest.raises(SymbolTableFullError) as exc_info:
            assemble(instructions)
        assert exc_info.value.symbol == f"v{16384 - 16}"


# =============================================================================
# Properties
# =============================================================================

class TestProperties:
    """Structural properties of the output."""

    PROGRAM = """
    @sum
    M=0
(LOOP)
    @i
    D=M
    @100
    D=D-A
    @END
    D;JGT
    @i
    D=M
    @sum
    M=D+M
    @i
    M=M+1
    @LOOP
    0;JMP
(END)
    @END
    0;JMP
"""

    def test_word_count(self):
        instructions = parse_source(self.PROGRAM)
        words = assemble(instructions)
        real = [i for i in instructions if not isinstance(i, Label)]
        assert len(words) == len(real)

    def test_word_kinds(self):
        instructions = [i for i in parse_source(self.PROGRAM) if not isinstance(i, Label)]
        for inst, word in zip(instructions, assemble(instructions)):
            if isinstance(inst, Address):
                assert classify_word(word) == InstructionKind.ADDRESS
                assert word >> 15 == 0
            else:
                assert classify_word(word) == InstructionKind.COMPUTE
                assert word >> 13 == 0b111

    def test_fresh_state_per_run(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source("(A)\n@x\n"))
        codegen.generate(parse_source("@y\n(A)\n"))
        assert codegen.get_labels() == {"A": 1}
        assert codegen.get_variables() == {"y": 16}

    def test_emitted_records(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source("(L)\n@L\nD=A\n"))
        emitted = codegen.get_emitted()
        assert [e.pc for e in emitted] == [0, 1]
        assert emitted[1].instruction == Compute("D", "A")

    def test_unsupported_instruction(self):
        with pytest.raises(AssembleError, match="unsupported instruction"):
            assemble(["@1"])
