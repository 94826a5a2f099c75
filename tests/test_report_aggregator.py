"""Tests for the conformer report state machine."""

import io

import pytest

from confab_report.core.config import ReportConfig
from confab_report.core.exceptions import (
    ExhaustedError,
    MissingReferenceError,
    ReportFinishedError,
    UnreadableFileError,
    UnsupportedFormatError,
)
from confab_report.core.services.report_aggregator import ReportAggregator

HEADER = (
    "**Generating Confab Report \n"
    "..Reference file = ref.sdf\n"
    "..Conformer file = confs.sdf\n"
    "\n"
)
LABELS = "..confs less than cutoffs: 0.2 0.5 1 1.5 2 3 4 100\n"


def make_aggregator(output, superimposer, opener=None, cutoff=0.5, reference="ref.sdf"):
    config = ReportConfig(
        reference_file=reference, rmsd_cutoff=cutoff, conformer_file="confs.sdf"
    )
    return ReportAggregator(output, superimposer, config=config, source_opener=opener)


class TestReportScenarios:
    """End-to-end report text for small conformer streams."""

    def test_two_molecules(self, superimposer, opener_for):
        output = io.StringIO()
        opener = opener_for([("A", "ref-a"), ("B", "ref-b")])
        aggregator = make_aggregator(output, superimposer, opener)

        state = aggregator.run([("A", 0.3), ("A", 0.7), ("B", 0.1)])

        assert output.getvalue() == (
            HEADER
            + "..Molecule 1\n..title = A\n"
            "..number of confs = 2\n"
            "..minimum rmsd = 0.3\n"
            + LABELS
            + "..0 1 2 2 2 2 2 2\n"
            "..cutoff (0.5) passed =  Yes\n"
            "\n"
            "..Molecule 2\n..title = B\n"
            "..number of confs = 1\n"
            "..minimum rmsd = 0.1\n"
            + LABELS
            + "..1 1 1 1 1 1 1 1\n"
            "..cutoff (0.5) passed =  Yes\n"
            "\n"
            "\n**Summary\n"
            "..number of molecules = 2\n"
            "..less than cutoff(0.5) = 2\n"
        )
        assert state.n_molecules == 2
        assert state.cutoff_passed == 2
        assert state.finished
        assert opener.opened == ["ref.sdf"]
        assert opener.source.closed

    def test_skipped_reference_reported_between_groups(self, superimposer, opener_for):
        output = io.StringIO()
        opener = opener_for([("A", "ref-a"), ("C", "ref-c"), ("B", "ref-b")])
        aggregator = make_aggregator(output, superimposer, opener)

        state = aggregator.run([("A", 0.3), ("B", 0.1)])

        report = output.getvalue()
        assert (
            "..cutoff (0.5) passed =  Yes\n"
            "\n"
            "..Molecule 2\n..title = C\n..number of confs = 0\n"
            "..Molecule 3\n..title = B\n"
            "..number of confs = 1\n"
        ) in report
        assert "..number of molecules = 3\n" in report
        assert state.n_molecules == 3
        assert state.cutoff_passed == 2

    def test_skipped_references_before_first_molecule(self, superimposer, opener_for):
        output = io.StringIO()
        opener = opener_for([("X", 0), ("Y", 0), ("A", "ref-a")])
        aggregator = make_aggregator(output, superimposer, opener)

        aggregator.run([("A", 0.2)])

        assert output.getvalue().startswith(
            HEADER
            + "..Molecule 1\n..title = X\n..number of confs = 0\n"
            "..Molecule 2\n..title = Y\n..number of confs = 0\n"
            "..Molecule 3\n..title = A\n"
            "..number of confs = 1\n"
        )

    def test_failed_cutoff(self, superimposer, opener_for):
        output = io.StringIO()
        aggregator = make_aggregator(output, superimposer, opener_for([("A", "r")]))

        state = aggregator.run([("A", 2.5), ("A", 0.8)])

        report = output.getvalue()
        assert "..minimum rmsd = 0.8\n" in report
        assert "..0 0 1 1 1 2 2 2\n" in report
        assert "..cutoff (0.5) passed =  No\n" in report
        assert "..less than cutoff(0.5) = 0\n" in report
        assert state.cutoff_passed == 0

    def test_cutoff_formatting(self, superimposer, opener_for):
        output = io.StringIO()
        aggregator = make_aggregator(
            output, superimposer, opener_for([("A", "r")]), cutoff=1.25
        )

        aggregator.run([("A", 1.0)])

        report = output.getvalue()
        assert "..cutoff (1.25) passed =  Yes\n" in report
        assert "..less than cutoff(1.25) = 1\n" in report

    def test_rerun_is_identical(self, superimposer, opener_for):
        conformers = [("A", 0.3), ("A", 0.123456789), ("C", 4.5), ("C", 150.0)]
        references = [("A", "ra"), ("B", "rb"), ("C", "rc")]

        reports = []
        for _ in range(2):
            output = io.StringIO()
            make_aggregator(output, superimposer, opener_for(references)).run(conformers)
            reports.append(output.getvalue())

        assert reports[0] == reports[1]
        assert "..minimum rmsd = 0.123457\n" in reports[0]
        assert "..0 0 0 0 0 0 0 2\n" in reports[0]

    def test_empty_stream_writes_nothing(self, superimposer, opener_for):
        output = io.StringIO()
        opener = opener_for([("A", "r")])

        state = make_aggregator(output, superimposer, opener).run([])

        assert output.getvalue() == ""
        assert opener.opened == []
        assert not state.started


class TestReportState:
    """Tests for counters and reference handling."""

    def test_conformers_aligned_against_their_reference(self, superimposer, opener_for):
        aggregator = make_aggregator(
            io.StringIO(), superimposer, opener_for([("A", "ref-a"), ("B", "ref-b")])
        )

        aggregator.run([("A", 0.3), ("A", 0.7), ("B", 0.1)])

        assert superimposer.calls == [("ref-a", 0.3), ("ref-a", 0.7), ("ref-b", 0.1)]

    def test_molecule_count_includes_skipped_references(self, superimposer, opener_for):
        references = [("A", 0), ("S1", 0), ("B", 0), ("S2", 0), ("S3", 0), ("C", 0)]
        aggregator = make_aggregator(io.StringIO(), superimposer, opener_for(references))

        state = aggregator.run([("A", 0.1), ("B", 0.9), ("B", 0.4), ("C", 3.0)])

        distinct_titles = 3
        skipped = 3
        assert state.n_molecules == distinct_titles + skipped
        assert state.cutoff_passed == 2

    def test_rmsd_list_holds_only_open_group(self, superimposer, opener_for):
        aggregator = make_aggregator(
            io.StringIO(), superimposer, opener_for([("A", 0), ("B", 0)])
        )

        aggregator.process_conformer("A", 0.3)
        aggregator.process_conformer("A", 0.7)
        assert aggregator.state.rmsds == [0.3, 0.7]

        aggregator.process_conformer("B", 0.1)
        assert aggregator.state.rmsds == [0.1]
        assert aggregator.state.current_title == "B"
        assert aggregator.state.current_reference.title == "B"

    def test_process_conformer_returns_rmsd(self, superimposer, opener_for):
        aggregator = make_aggregator(io.StringIO(), superimposer, opener_for([("A", 0)]))
        assert aggregator.process_conformer("A", 0.42) == pytest.approx(0.42)

    def test_no_conformers_after_summary(self, superimposer, opener_for):
        aggregator = make_aggregator(io.StringIO(), superimposer, opener_for([("A", 0)]))
        aggregator.process_conformer("A", 0.1, is_last=True)

        with pytest.raises(ReportFinishedError):
            aggregator.process_conformer("A", 0.2)

    def test_explicit_begin_opens_reference_once(self, superimposer, opener_for):
        output = io.StringIO()
        opener = opener_for([("A", "ref-a")])
        aggregator = make_aggregator(output, superimposer, opener)

        aggregator.begin("ref.sdf")
        aggregator.process_conformer("A", 0.1, is_last=True)

        assert opener.opened == ["ref.sdf"]
        assert output.getvalue().startswith(HEADER + "..Molecule 1\n..title = A\n")
        assert superimposer.calls == [("ref-a", 0.1)]

    def test_header_names_the_file_passed_to_begin(self, superimposer, opener_for):
        output = io.StringIO()
        opener = opener_for([("A", "ref-a")])
        aggregator = make_aggregator(output, superimposer, opener, reference="other.sdf")

        aggregator.begin("ref.sdf")
        aggregator.process_conformer("A", 0.1)

        assert opener.opened == ["ref.sdf"]
        assert output.getvalue().startswith(HEADER)


class TestReportErrors:
    """Fatal errors stop the report and keep earlier output."""

    def test_exhausted_reference_keeps_earlier_output(self, superimposer, opener_for):
        output = io.StringIO()
        opener = opener_for([("A", "ra"), ("B", "rb")])
        aggregator = make_aggregator(output, superimposer, opener)

        with pytest.raises(ExhaustedError):
            aggregator.run([("A", 0.3), ("D", 0.1)])

        report = output.getvalue()
        assert report.startswith(HEADER + "..Molecule 1\n..title = A\n")
        assert "..cutoff (0.5) passed =  Yes\n" in report
        assert report.endswith("..Molecule 2\n..title = B\n..number of confs = 0\n")
        assert "**Summary" not in report
        assert opener.source.closed

    def test_title_cannot_reappear_after_its_group_closed(self, superimposer, opener_for):
        aggregator = make_aggregator(
            io.StringIO(), superimposer, opener_for([("A", 0), ("B", 0)])
        )

        with pytest.raises(ExhaustedError):
            aggregator.run([("A", 0.1), ("B", 0.2), ("A", 0.3)])

    @pytest.mark.parametrize("reference", [None, ""])
    def test_missing_reference(self, superimposer, opener_for, reference):
        output = io.StringIO()
        opener = opener_for([("A", 0)])
        aggregator = make_aggregator(output, superimposer, opener, reference=reference)

        with pytest.raises(MissingReferenceError):
            aggregator.process_conformer("A", 0.1)

        assert output.getvalue() == ""
        assert opener.opened == []

    def test_unsupported_reference_format(self, superimposer):
        output = io.StringIO()
        aggregator = make_aggregator(output, superimposer, reference="reference.txt")

        with pytest.raises(UnsupportedFormatError):
            aggregator.process_conformer("A", 0.1)

        assert output.getvalue() == ""

    def test_unreadable_reference_file(self, superimposer, tmp_path):
        output = io.StringIO()
        missing = str(tmp_path / "missing.sdf")
        aggregator = make_aggregator(output, superimposer, reference=missing)

        with pytest.raises(UnreadableFileError) as excinfo:
            aggregator.process_conformer("A", 0.1)

        assert excinfo.value.filename == missing
        assert output.getvalue() == ""

    def test_no_conformers_after_fatal_error(self, superimposer, opener_for):
        output = io.StringIO()
        aggregator = make_aggregator(output, superimposer, opener_for([("A", "ra")]))

        aggregator.process_conformer("A", 0.3)
        with pytest.raises(ExhaustedError):
            aggregator.process_conformer("D", 0.1)
        report = output.getvalue()

        with pytest.raises(ReportFinishedError):
            aggregator.process_conformer("D", 0.1)

        assert aggregator.state.failed
        assert aggregator.state.cutoff_passed == 1
        assert aggregator.state.n_molecules == 1
        assert output.getvalue() == report
        assert report.count("..minimum rmsd = ") == 1

    def test_closed_group_rmsds_are_not_kept(self, superimposer, opener_for):
        aggregator = make_aggregator(io.StringIO(), superimposer, opener_for([("A", "ra")]))

        aggregator.process_conformer("A", 0.3)
        aggregator.process_conformer("A", 0.6)
        with pytest.raises(ExhaustedError):
            aggregator.process_conformer("D", 0.1)

        assert aggregator.state.rmsds == []
