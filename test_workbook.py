import ironcalc
import pytest

from workbook import Workbook, WorkbookLoadError


@pytest.fixture
def wb():
    return Workbook.new_empty("model.xlsx")


def _set(wb, ref_cells, sheet=0):
    for (row, col), text in ref_cells.items():
        wb.set_cell_input(sheet, row, col, text)
    wb.recalculate()


def test_new_empty_has_one_sheet(wb):
    assert wb.sheet_names() == ["Sheet1"]
    assert wb.get_formula(0, 1, 1) is None
    assert wb.get_formatted_value(0, 1, 1) == ""


def test_new_empty_rejects_unknown_timezone():
    with pytest.raises(WorkbookLoadError):
        Workbook.new_empty("model.xlsx", "en", "Not/AZone")


@pytest.mark.parametrize(
    "index, label",
    [(1, "A"), (26, "Z"), (27, "AA"), (52, "AZ"), (703, "AAA"), (16384, "XFD")],
)
def test_column_label(index, label):
    assert Workbook.column_label(index) == label


@pytest.mark.parametrize(
    "text, shown",
    [("42", "42"), ("3.5", "3.5"), ("hello", "hello")],
)
def test_literals(wb, text, shown):
    _set(wb, {(1, 1): text})
    assert wb.get_formula(0, 1, 1) == text
    assert wb.get_formatted_value(0, 1, 1) == shown


def test_formula_follows_inputs_after_recalculate(wb):
    _set(wb, {(1, 1): "2", (1, 2): "=A1*10"})
    assert wb.get_formatted_value(0, 1, 2) == "20"

    _set(wb, {(1, 1): "3"})
    assert wb.get_formatted_value(0, 1, 2) == "30"
    assert wb.get_formula(0, 1, 2) == "=A1*10"


def test_empty_input_clears_cell(wb):
    _set(wb, {(1, 1): "5"})
    _set(wb, {(1, 1): ""})
    assert wb.get_formula(0, 1, 1) is None
    assert wb.get_formatted_value(0, 1, 1) == ""


@pytest.mark.parametrize(
    "formula, shown",
    [
        ("=1+2*3", "7"),
        ("=(1+2)*3", "9"),
        ("=7/2", "3.5"),
        ("=SUM(A1:A3)", "60"),
        ("=MAX(A1:A3)", "30"),
        ('=IF(A1>5,"big","small")', "big"),
        ("=$A$1+A2", "30"),
    ],
)
def test_formulas(wb, formula, shown):
    _set(wb, {(1, 1): "10", (2, 1): "20", (3, 1): "30", (5, 5): formula})
    assert wb.get_formatted_value(0, 5, 5) == shown
    assert wb.get_formula(0, 5, 5) == formula


@pytest.mark.parametrize("formula, error", [("=1/0", "#DIV/0!"), ("=NOPE(1)", "#NAME?")])
def test_formula_errors_are_values(wb, formula, error):
    _set(wb, {(4, 4): formula})
    assert wb.get_formatted_value(0, 4, 4) == error


def test_circular_reference_is_an_error_value(wb):
    _set(wb, {(1, 1): "=B1", (1, 2): "=A1"})
    assert wb.get_formatted_value(0, 1, 1).startswith("#")


def test_long_chain_against_entry_order(wb):
    # each row reads the row below it; the bottom row is entered last
    for row in range(1, 400):
        wb.set_cell_input(0, row, 1, f"=A{row + 1}+1")
    wb.set_cell_input(0, 400, 1, "1")
    wb.recalculate()
    assert wb.get_formatted_value(0, 1, 1) == "400"
    assert wb.get_formatted_value(0, 350, 1) == "51"


def test_cross_sheet_reference(wb):
    wb.add_sheet()
    wb.set_cell_input(1, 1, 1, "7")
    _set(wb, {(1, 1): "=Sheet2!A1*2"})
    assert wb.get_formatted_value(0, 1, 1) == "14"


def test_add_sheet_returns_new_name(wb):
    assert wb.add_sheet() == "Sheet2"
    assert wb.sheet_names() == ["Sheet1", "Sheet2"]


# ---------- loading ----------


def test_load_xlsx_keeps_formulas(tmp_path):
    path = tmp_path / "book.xlsx"
    model = ironcalc.create("book", "en", "UTC")
    model.rename_sheet(0, "Data")
    model.set_user_input(0, 1, 1, "4")
    model.set_user_input(0, 2, 1, "2.5")
    model.set_user_input(0, 1, 2, "=A1*A2")
    model.set_user_input(0, 3, 3, "note")
    model.add_sheet("Other")
    model.set_user_input(1, 1, 1, "=1<2")
    model.evaluate()
    model.save_to_xlsx(str(path))

    wb = Workbook.load(str(path), "en", "UTC")
    assert wb.sheet_names() == ["Data", "Other"]
    assert wb.get_formula(0, 1, 2) == "=A1*A2"
    assert wb.get_formatted_value(0, 1, 2) == "10"
    assert wb.get_formatted_value(0, 3, 3) == "note"
    assert wb.get_formatted_value(1, 1, 1) == "TRUE"


def test_load_csv_into_single_sheet(tmp_path):
    path = tmp_path / "prices.csv"
    path.write_text("item,price\napple,1.5\npear,\n,=B2*2\n", encoding="utf-8")

    wb = Workbook.load(str(path))
    assert wb.sheet_names() == ["prices"]
    assert wb.get_formatted_value(0, 2, 2) == "1.5"
    assert wb.get_formula(0, 3, 2) is None
    assert wb.get_formatted_value(0, 4, 2) == "3"


def test_load_empty_csv(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    wb = Workbook.load(str(path))
    assert wb.sheet_names() == ["empty"]


def test_csv_with_invalid_sheet_name_keeps_default(tmp_path):
    path = tmp_path / "a[1].csv"
    path.write_text("x\n", encoding="utf-8")
    wb = Workbook.load(str(path))
    assert wb.sheet_names() == ["Sheet1"]
    assert wb.get_formatted_value(0, 1, 1) == "x"


@pytest.mark.parametrize("name", ["missing.xlsx", "notes.txt"])
def test_load_failures_raise(tmp_path, name):
    with pytest.raises(WorkbookLoadError):
        Workbook.load(str(tmp_path / name))


def test_load_corrupt_xlsx_raises(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip file")
    with pytest.raises(WorkbookLoadError):
        Workbook.load(str(path))
