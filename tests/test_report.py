import json

from pescope import __version__
from pescope.core.models import InspectionResult
from pescope.output.report import REPORT_TYPE, PescopeReportGenerator
from pescope.parsers.pe_parser import PEParser

from .pe_builder import SAMPLE_SECTIONS, build_pe


def make_result(**kwargs) -> InspectionResult:
    data = build_pe(**kwargs)
    return InspectionResult(
        path="/tmp/sample.exe", size=len(data), metadata=PEParser(data).parse()
    )


def test_report_fields():
    result = make_result(sections=SAMPLE_SECTIONS, subsystem=3)
    report = PescopeReportGenerator().build(result)

    assert report["report_type"] == REPORT_TYPE
    assert report["version"] == __version__
    assert report["path"] == "/tmp/sample.exe"
    assert report["size"] == result.size
    assert "generated_at" in report

    file_header = report["metadata"]["file_header"]
    assert file_header["machine"] == 0x14C
    assert file_header["machine_name"] == "x86"
    assert file_header["number_of_sections"] == 3
    assert file_header["timestamp_utc"] == "1970-01-01T00:00:00+00:00"

    optional_header = report["metadata"]["optional_header"]
    assert optional_header["is_pe32_plus"] is False
    assert optional_header["format"] == "PE32"
    assert optional_header["image_base"] == 0x400000
    assert optional_header["subsystem_name"] == "Windows CUI"

    sections = report["metadata"]["sections"]
    assert [s["index"] for s in sections] == [0, 1, 2]
    assert sections[1]["name"] == ".rdata"
    assert sections[1]["pointer_to_raw_data"] == 0x2000


def test_large_image_base_survives_json():
    result = make_result(
        magic=0x20B, size_of_optional_header=0xF0, image_base=0xFFFFFFFFFFFFFFFF
    )
    loaded = json.loads(PescopeReportGenerator().to_json(result))
    assert loaded["metadata"]["optional_header"]["image_base"] == 0xFFFFFFFFFFFFFFFF
    assert loaded["metadata"]["optional_header"]["format"] == "PE32+"
    assert loaded["metadata"]["sections"] == []


def test_generate_json(tmp_path):
    result = make_result(sections=SAMPLE_SECTIONS)
    target = tmp_path / "nested" / "report.json"

    written = PescopeReportGenerator(indent=4).generate_json(result, target)

    assert written == str(target.resolve())
    text = target.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert json.loads(text)["metadata"]["file_header"]["number_of_sections"] == 3
