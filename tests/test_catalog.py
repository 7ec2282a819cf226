import json
from decimal import Decimal
from pathlib import Path

import pytest

from quote_tool.config.settings import Settings
from quote_tool.data.build_catalog import build_catalog_report, load_catalog
from quote_tool.errors import CatalogError

STEPS_HEADER = "position,id,title,description,multi_select,is_timeline\n"
OPTIONS_HEADER = "step_id,option_id,name,base_price,description,multiplier\n"


def write_catalog(tmp_path: Path, steps: str, options: str) -> tuple[Path, Path]:
    steps_csv = tmp_path / "steps.csv"
    options_csv = tmp_path / "options.csv"
    steps_csv.write_text(STEPS_HEADER + steps, encoding="utf-8")
    options_csv.write_text(OPTIONS_HEADER + options, encoding="utf-8")
    return steps_csv, options_csv


def make_settings(tmp_path: Path, steps_csv: Path, options_csv: Path) -> Settings:
    return Settings(
        project_root=tmp_path,
        steps_csv=steps_csv,
        options_csv=options_csv,
        build_report=tmp_path / "outputs" / "catalog_report.json",
    )


def test_default_catalog_shape(catalog):
    """The shipped catalog has the five questionnaire steps in order."""
    assert [s.title for s in catalog.steps] == [
        "Project Type", "Core Features", "Integrations", "Design & UI", "Timeline"
    ]
    assert [s.id for s in catalog.steps] == [1, 2, 3, 4, 5]
    assert catalog.timeline_index == 4
    assert catalog.option_count == 22


def test_default_catalog_values(catalog):
    project_type, features, _, design, timeline = catalog.steps

    assert project_type.find_option("landing").base_price == 350
    assert project_type.multi_select is False
    assert features.multi_select is True
    assert design.find_option("basic").base_price == 0
    assert timeline.find_option("rush").multiplier == Decimal("1.30")
    assert timeline.find_option("flexible").multiplier == Decimal("0.85")
    assert timeline.find_option("standard").multiplier is None
    assert project_type.find_option("nope") is None


def test_quoted_fields_keep_commas(catalog):
    analytics = catalog.steps[2].find_option("analytics")
    assert analytics.name == "Analytics (GA, Mixpanel)"


def test_step_at_bounds(catalog):
    assert catalog.step_at(0).title == "Project Type"
    assert catalog.step_at(4).title == "Timeline"
    assert catalog.step_at(5) is None
    assert catalog.step_at(-1) is None
    assert catalog.step_at(True) is None


def test_positions_order_steps(tmp_path):
    steps_csv, options_csv = write_catalog(
        tmp_path,
        "1,7,Second,,false,false\n0,3,First,,false,false\n",
        "3,a,A,10,,\n7,b,B,20,,\n",
    )
    catalog = load_catalog(steps_csv, options_csv)
    assert [s.title for s in catalog.steps] == ["First", "Second"]
    assert catalog.steps[1].options[0].id == "b"


@pytest.mark.parametrize("steps,options,message", [
    ("0,1,A,,false,false\n", "1,x,X,-5,,\n", "negative"),
    ("0,1,A,,false,false\n", "1,x,X,ten,,\n", "integer"),
    ("0,1,A,,false,false\n", "1,x,X,1,,\n1,x,Y,2,,\n", "Duplicate option ids"),
    ("0,1,A,,false,true\n1,2,B,,false,true\n", "", "More than one"),
    ("0,1,A,,false,false\n", "1,x,X,0,,1.2\n", "not the timeline step"),
    ("0,1,A,,false,true\n", "1,x,X,0,,fast\n", "not a number"),
    ("0,1,A,,false,false\n", "9,x,X,1,,\n", "unknown step ids"),
    ("0,1,A,,false,false\n2,2,B,,false,false\n", "", "without gaps"),
    ("0,1,A,,false,false\n1,1,B,,false,false\n", "", "Duplicate step ids"),
])
def test_invalid_catalogs_rejected(tmp_path, steps, options, message):
    steps_csv, options_csv = write_catalog(tmp_path, steps, options)
    with pytest.raises(CatalogError, match=message):
        load_catalog(steps_csv, options_csv)


def test_missing_columns_rejected(tmp_path):
    steps_csv = tmp_path / "steps.csv"
    options_csv = tmp_path / "options.csv"
    steps_csv.write_text("position,id,title\n0,1,A\n", encoding="utf-8")
    options_csv.write_text(OPTIONS_HEADER, encoding="utf-8")

    with pytest.raises(CatalogError, match="missing columns"):
        load_catalog(steps_csv, options_csv)


def test_missing_file_rejected(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        load_catalog(tmp_path / "nope.csv", tmp_path / "nope2.csv")


def test_build_report_success(tmp_path):
    steps_csv, options_csv = write_catalog(
        tmp_path,
        "0,1,Type,,false,false\n1,2,Empty,,true,false\n",
        "1,a,A,100,,\n1,b,B,300,,\n",
    )
    settings = make_settings(tmp_path, steps_csv, options_csv)

    report = build_catalog_report(settings)

    assert report["status"] == "success"
    assert report["metrics"]["step_count"] == 2
    assert report["metrics"]["option_count"] == 2
    assert report["metrics"]["price_range"] == [100, 300]
    assert "Step 'Empty' has no options" in report["warnings"]
    assert any("No timeline step" in w for w in report["warnings"])
    assert len(report["input_files"]["steps"]["hash"]) == 12

    saved = json.loads(settings.build_report.read_text())
    assert saved["status"] == "success"


def test_build_report_failure(tmp_path):
    steps_csv, options_csv = write_catalog(tmp_path, "0,1,A,,false,false\n", "1,x,X,-1,,\n")
    settings = make_settings(tmp_path, steps_csv, options_csv)

    report = build_catalog_report(settings, save=False)

    assert report["status"] == "failed"
    assert report["errors"] and "negative" in report["errors"][0]
    assert not settings.build_report.exists()


@pytest.mark.parametrize("content", [b"", b"\xff\xfe\x00\x81position,id\n"])
def test_unparseable_files_rejected(tmp_path, content):
    """Empty or undecodable CSVs surface as CatalogError, not pandas errors."""
    steps_csv, options_csv = write_catalog(tmp_path, "0,1,A,,false,false\n", "1,x,X,1,,\n")
    steps_csv.write_bytes(content)

    with pytest.raises(CatalogError, match="could not be parsed"):
        load_catalog(steps_csv, options_csv)

    report = build_catalog_report(make_settings(tmp_path, steps_csv, options_csv))
    assert report["status"] == "failed"
    assert "steps.csv could not be parsed" in report["errors"][0]
    assert json.loads((tmp_path / "outputs" / "catalog_report.json").read_text())["status"] == "failed"
