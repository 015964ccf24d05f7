"""Conversion rule tests"""

import pytest

from cloud_storage import conversion


class TestDetermineType:
    @pytest.mark.parametrize(
        "resource, expected",
        [
            ("https://oss.test/u/deck.pptx", "dynamic"),
            ("https://oss.test/u/DECK.PPTX", "static"),
            ("https://oss.test/u/deck.ppt", "static"),
            ("https://oss.test/u/paper.pdf", "static"),
            ("https://oss.test/u/deck.pptx?Expires=1&Signature=x", "dynamic"),
        ],
    )
    def test_type_by_extension(self, resource, expected):
        assert conversion.determine_type(resource) == expected


class TestCourseware:
    def test_courseware_extensions(self):
        assert conversion.is_courseware("https://oss.test/u/lesson.ice")
        assert conversion.is_courseware("https://oss.test/u/lesson.vf")
        assert not conversion.is_courseware("https://oss.test/u/lesson.pdf")
        assert not conversion.is_courseware("https://oss.test/u/LESSON.ICE")

    def test_result_url_sits_next_to_file(self):
        url = conversion.courseware_result_url("https://oss.test/a/b/lesson.ice")
        assert url == "https://oss.test/a/b/result"

    def test_result_url_drops_query(self):
        url = conversion.courseware_result_url("https://oss.test/a/lesson.vf?token=1")
        assert url == "https://oss.test/a/result"


class TestConvertStep:
    def test_step_predicates(self):
        assert conversion.is_convert_done("Done")
        assert conversion.is_convert_failed("Failed")
        assert conversion.is_converting("Converting")
        assert not conversion.is_convert_done("None")
        assert not conversion.is_convert_failed(None)
