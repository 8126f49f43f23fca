"""
Unit tests for the resume filter
"""

from ingestion.resume import ResumeFilter


def _rows(*keys):
    return [(key, f"name {key}") for key in keys]


class TestResumeFilter:
    """Test skipping of already committed rows"""

    def test_no_checkpoint_passes_everything(self):
        resume = ResumeFilter(None)

        out = list(resume.filter(_rows("P1", "P2", "P3")))

        assert [r[0] for r in out] == ["P1", "P2", "P3"]
        assert resume.checkpoint_found is True
        assert resume.records_skipped == 0

    def test_empty_string_checkpoint_passes_everything(self):
        resume = ResumeFilter("")

        assert len(list(resume.filter(_rows("P1", "P2")))) == 2

    def test_resumes_strictly_after_checkpoint(self):
        resume = ResumeFilter("P2")

        out = list(resume.filter(_rows("P1", "P2", "P3", "P4")))

        assert [r[0] for r in out] == ["P3", "P4"]
        assert resume.checkpoint_found is True
        assert resume.records_skipped == 2

    def test_checkpoint_on_last_row_yields_nothing(self):
        resume = ResumeFilter("P3")

        assert list(resume.filter(_rows("P1", "P2", "P3"))) == []
        assert resume.checkpoint_found is True

    def test_stale_checkpoint_suppresses_everything(self):
        """A key missing from the input swallows the whole stream"""
        resume = ResumeFilter("GONE")

        assert list(resume.filter(_rows("P1", "P2", "P3"))) == []
        assert resume.checkpoint_found is False
        assert resume.records_skipped == 3

    def test_later_duplicates_of_key_pass_through(self):
        resume = ResumeFilter("P1")

        out = list(resume.filter(_rows("P1", "P2", "P1")))

        assert [r[0] for r in out] == ["P2", "P1"]

    def test_custom_key_function(self):
        resume = ResumeFilter("name P1", key_fn=lambda r: r[1])

        out = list(resume.filter(_rows("P1", "P2")))

        assert [r[0] for r in out] == ["P2"]

    def test_padded_key_matches_stripped_checkpoint(self):
        """The checkpoint holds the stripped key written after a commit"""
        resume = ResumeFilter("P1")

        out = list(resume.filter([(" P1 ", "a"), ("P2", "b")]))

        assert [r[0] for r in out] == ["P2"]
        assert resume.checkpoint_found is True

    def test_admit_one_record_at_a_time(self):
        resume = ResumeFilter("P2")

        admitted = [resume.admit(row) for row in _rows("P1", "P2", "P3")]

        assert admitted == [False, False, True]
        assert resume.records_skipped == 2
