"""Tests for confirming and executing instructions."""

from unittest.mock import Mock

from caia.ops import ConfirmationGate, Instruction, InstructionExecutor, SheetOperation

from conftest import ScriptedInput


def _create(filename, content="x"):
    return Instruction(operation="create", filename=filename, content=content)


class TestInstructionExecutor:
    """Tests for InstructionExecutor."""

    def test_declined_create_writes_nothing(self, workspace):
        """Test a decline leaves neither file nor spreadsheet behind."""
        executor = InstructionExecutor(
            workspace, gate=ConfirmationGate(input_func=ScriptedInput(["n", "no"]))
        )
        sheet = Instruction(
            operation="create",
            filename="data.xlsx",
            actions=[SheetOperation(kind="add_row", sheet="Sheet1", row=["a"])],
        )

        results = [executor.execute(_create("hi.py")), executor.execute(sheet)]

        assert all(r.cancelled and not r.success for r in results)
        assert list(workspace.iterdir()) == []

    def test_mutation_error_becomes_failed_result(self, executor, workspace):
        result = executor.execute(Instruction(operation="read", filename="missing.txt"))

        assert result.success is False
        assert result.cancelled is False
        assert "error reading file" in result.errors[0]

    def test_unexpected_error_is_contained(self, workspace, approve_all):
        file_mutator = Mock()
        file_mutator.execute.side_effect = RuntimeError("disk on fire")
        executor = InstructionExecutor(
            workspace, gate=ConfirmationGate(input_func=approve_all), file_mutator=file_mutator
        )

        result = executor.execute(_create("a.py"))

        assert result.success is False
        assert result.errors == ["disk on fire"]

    def test_routes_spreadsheets_by_extension(self, workspace, approve_all):
        file_mutator, spreadsheet_mutator = Mock(), Mock()
        executor = InstructionExecutor(
            workspace,
            gate=ConfirmationGate(input_func=approve_all),
            file_mutator=file_mutator,
            spreadsheet_mutator=spreadsheet_mutator,
        )
        sheet = Instruction(
            operation="create",
            filename="Report.XLS",
            actions=[SheetOperation(kind="create_sheet", sheet="A")],
        )

        executor.execute(sheet)
        executor.execute(_create("report.py"))

        spreadsheet_mutator.execute.assert_called_once_with(sheet)
        assert file_mutator.execute.call_count == 1

    def test_execute_all_keeps_order_and_continues_after_failure(self, executor, workspace, capsys):
        """Test a failing instruction does not stop the rest of the batch."""
        instructions = [
            _create("a.py", "print('a')"),
            Instruction(operation="edit", filename="missing/dir/b.py", content="x"),
            _create("b.js", "let b;"),
        ]

        results = executor.execute_all(instructions)

        assert [r.filename for r in results] == ["a.py", "missing/dir/b.py", "b.js"]
        assert [r.success for r in results] == [True, False, True]
        assert (workspace / "b.js").read_text() == "let b;"
        out = capsys.readouterr().out
        assert out.index("Preparing to create file: a.py") < out.index("Preparing to create file: b.js")
        assert "Error performing operation" in out

    def test_describe(self, executor):
        sheet = Instruction(
            operation="create",
            filename="d.xlsx",
            actions=[SheetOperation(kind="create_sheet", sheet="S")],
        )

        assert executor.describe(sheet) == "Preparing to create Excel file: d.xlsx with 1 sheet operations"
        assert executor.describe(Instruction(operation="read", filename="x")) == "Preparing to read file: x"
