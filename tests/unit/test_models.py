"""Unit tests for estimation and investment analysis models."""

import pytest
from pydantic import ValidationError

from models.estimation import Estimation, GroundingSource, UploadedFile
from models.investment_analysis import InvestmentAnalysis, RepairLevel


class TestUploadedFile:
    """Tests for UploadedFile."""

    def test_bytes_round_trip(self):
        file = UploadedFile.from_bytes(b"\x00\x01image", "image/webp")

        assert file.mime_type == "image/webp"
        assert file.to_bytes() == b"\x00\x01image"

    def test_accepts_browser_shape(self):
        file = UploadedFile.model_validate({"data": "aGVsbG8=", "type": "image/jpeg"})

        assert file.mime_type == "image/jpeg"
        assert file.to_bytes() == b"hello"


class TestEstimation:
    """Tests for Estimation."""

    def test_camel_case_input(self):
        estimation = Estimation.model_validate({
            "summary": {"totalEstimatedCost": "$55,000 - $60,000"},
            "repairs": [
                {"area": "Roof", "observations": "Sagging.", "estimatedCost": "$9,000", "difficulty": 4}
            ],
        })

        assert estimation.summary.total_estimated_cost == "$55,000 - $60,000"
        assert estimation.repairs[0].estimated_cost == "$9,000"
        assert estimation.condition_summary() == "Roof: Sagging."

    def test_difficulty_range(self):
        with pytest.raises(ValidationError):
            Estimation.model_validate({
                "summary": {"totalEstimatedCost": "$1"},
                "repairs": [{"area": "Roof", "difficulty": 7}],
            })


class TestGroundingSource:
    """Tests for GroundingSource."""

    def test_requires_uri_and_title(self):
        with pytest.raises(ValidationError):
            GroundingSource(uri="", title="Title")


class TestInvestmentAnalysis:
    """Tests for InvestmentAnalysis."""

    def test_unknown_repair_level(self):
        analysis = InvestmentAnalysis.model_validate({"estimatedRepairLevel": "Moderate"})

        assert analysis.estimated_repair_level == "Moderate"
        assert analysis.repair_level is None

    @pytest.mark.parametrize("level", ["Light Cosmetic", "Medium", "Heavy", "Gut"])
    def test_known_repair_levels(self, level):
        analysis = InvestmentAnalysis.model_validate({"estimatedRepairLevel": level})

        assert analysis.repair_level == RepairLevel(level)

    def test_numeric_amounts_accepted(self):
        analysis = InvestmentAnalysis.model_validate({
            "suggestedARV": 215000,
            "comparables": [{"soldPrice": 210000, "sqft": 1450}],
        })

        assert analysis.suggested_arv == 215000
        assert analysis.comparables[0].sqft == 1450

    def test_to_dict_only_set_fields(self):
        analysis = InvestmentAnalysis.model_validate({"propertyCondition": "Fair."})

        assert analysis.to_dict() == {"propertyCondition": "Fair."}
