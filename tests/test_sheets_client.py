"""Tests for the openpyxl workbook client."""

import zipfile

import pytest
from openpyxl import Workbook, load_workbook

from caia.errors import MutationError
from caia.sheets import DEFAULT_SHEET, WorkbookClient, classify_row, parse_cell_notation


class TestParseCellNotation:
    """Tests for A1 notation parsing."""

    def test_valid(self):
        assert parse_cell_notation("B12") == ("B", 12)
        assert parse_cell_notation("aa3") == ("AA", 3)

    @pytest.mark.parametrize("cell", ["", "A", "12", "A0", "A1:B2", "Sheet1!A1", "ABCD1"])
    def test_invalid(self, cell):
        with pytest.raises(ValueError):
            parse_cell_notation(cell)


class TestWorkbookClient:
    """Tests for WorkbookClient."""

    def test_new_workbook_has_default_sheet(self):
        workbook = WorkbookClient().new_workbook()

        assert workbook.sheetnames == [DEFAULT_SHEET]

    def test_row_count_of_empty_sheet_is_zero(self):
        client = WorkbookClient()
        workbook = client.new_workbook()

        assert client.row_count(workbook[DEFAULT_SHEET]) == 0

    def test_append_rows_in_order(self):
        """Test N appends to an empty sheet fill rows 1..N."""
        client = WorkbookClient()
        workbook = client.new_workbook()

        indexes = [
            client.append_row(workbook, DEFAULT_SHEET, classify_row([str(n), f"item{n}"]))
            for n in range(1, 6)
        ]

        assert indexes == [1, 2, 3, 4, 5]
        assert client.read_rows(workbook, DEFAULT_SHEET) == [[n, f"item{n}"] for n in range(1, 6)]

    def test_append_after_last_non_empty_row(self):
        """Test a value set further down moves the append position."""
        client = WorkbookClient()
        workbook = client.new_workbook()
        client.set_cell(workbook, DEFAULT_SHEET, "C4", "far")

        index = client.append_row(workbook, DEFAULT_SHEET, classify_row(["next"]))

        assert index == 5

    def test_append_to_missing_sheet_fails(self):
        client = WorkbookClient()

        with pytest.raises(MutationError, match="does not exist"):
            client.append_row(client.new_workbook(), "Nope", classify_row(["a"]))

    def test_set_cell_on_missing_sheet_fails(self):
        client = WorkbookClient()

        with pytest.raises(MutationError):
            client.set_cell(client.new_workbook(), "Nope", "A1", "x")

    def test_set_cell_invalid_coordinate_fails(self):
        client = WorkbookClient()

        with pytest.raises(MutationError, match="Invalid cell notation"):
            client.set_cell(client.new_workbook(), DEFAULT_SHEET, "not-a-cell", "x")

    def test_text_is_not_a_formula(self):
        """Test a text value starting with '=' is stored literally."""
        client = WorkbookClient()
        workbook = client.new_workbook()

        client.set_cell(workbook, DEFAULT_SHEET, "A1", "=SUM(B1:B2)")

        cell = workbook[DEFAULT_SHEET]["A1"]
        assert cell.value == "=SUM(B1:B2)"
        assert cell.data_type == "s"

    def test_create_sheet_twice_fails(self):
        client = WorkbookClient()
        workbook = client.new_workbook()
        client.create_sheet(workbook, "Data")

        with pytest.raises(MutationError, match="already exists"):
            client.create_sheet(workbook, "Data")

    def test_open_missing_workbook_fails(self, tmp_path):
        with pytest.raises(MutationError, match="Failed to open workbook"):
            WorkbookClient().open_workbook(tmp_path / "missing.xlsx")

    def test_open_non_workbook_fails(self, tmp_path):
        path = tmp_path / "fake.xlsx"
        path.write_text("not a zip")

        with pytest.raises(MutationError):
            WorkbookClient().open_workbook(path)

    def test_save_to_missing_directory_fails(self, tmp_path):
        client = WorkbookClient()

        with pytest.raises(MutationError, match="Failed to save"):
            client.save(client.new_workbook(), tmp_path / "missing" / "out.xlsx")

    def test_summarize(self, tmp_path):
        path = tmp_path / "book.xlsx"
        workbook = Workbook()
        workbook.active.title = "People"
        workbook.active.append(["Name", "Age"])
        workbook.active.append(["Ann", 30])
        workbook.create_sheet("Empty")
        workbook.save(path)

        names, counts = WorkbookClient().summarize(path)

        assert names == ["People", "Empty"]
        assert counts == {"People": 2, "Empty": 0}
        # summarize must not modify the file
        assert load_workbook(path)["People"]["B2"].value == 30

    def test_cleared_cells_do_not_count(self):
        """Test trailing rows whose values were cleared are not counted."""
        client = WorkbookClient()
        workbook = client.new_workbook()
        client.append_row(workbook, DEFAULT_SHEET, classify_row(["first"]))
        client.set_cell(workbook, DEFAULT_SHEET, "C9", "temp")
        workbook[DEFAULT_SHEET]["C9"].value = None

        assert client.row_count(workbook[DEFAULT_SHEET]) == 1
        assert client.append_row(workbook, DEFAULT_SHEET, classify_row(["second"])) == 2

    def test_open_with_malformed_xml_fails(self, tmp_path):
        path = tmp_path / "bad.xlsx"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("[Content_Types].xml", "this is <not xml")

        with pytest.raises(MutationError, match="Failed to open workbook"):
            WorkbookClient().open_workbook(path)
