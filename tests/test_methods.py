"""Tests for the calculation method registry."""
import logging

import pytest

from salahtimes.errors import ErrorKind, UnknownMethod
from salahtimes.methods import (
    DEFAULT_METHOD_ID,
    Method,
    get_method,
    list_methods,
    resolve_method,
)
from salahtimes.models import CalculationMethod


class TestCalculationMethod:

    def test_frozen(self):
        method = get_method(3)
        with pytest.raises(AttributeError):
            method.fajr_angle_deg = 10.0

    def test_requires_exactly_one_isha_rule(self):
        with pytest.raises(ValueError):
            CalculationMethod(id=99, name="Both", fajr_angle_deg=18,
                              isha_angle_deg=17, isha_offset_minutes=90)
        with pytest.raises(ValueError):
            CalculationMethod(id=99, name="Neither", fajr_angle_deg=18)

    def test_rejects_non_positive_shadow_factor(self):
        with pytest.raises(ValueError):
            CalculationMethod(id=99, name="Bad", fajr_angle_deg=18,
                              isha_angle_deg=17, asr_shadow_factor=0)


class TestRegistry:

    def test_ids_unique(self):
        ids = [m.value.id for m in Method]
        assert len(ids) == len(set(ids))

    def test_known_ids(self):
        expected = {1, 2, 3, 4, 5, 7, 8, 9, 10, 11, 12, 13, 14, 15}
        assert {m.id for m in list_methods()} == expected

    def test_list_sorted(self):
        ids = [m.id for m in list_methods()]
        assert ids == sorted(ids)

    def test_every_method_has_one_isha_rule(self):
        for method in list_methods():
            assert (method.isha_angle_deg is None) != (method.isha_offset_minutes is None)

    def test_umm_al_qura_uses_fixed_isha(self):
        method = get_method(1)
        assert method.fajr_angle_deg == 18.5
        assert method.isha_offset_minutes == 90
        assert method.isha_angle_deg is None

    def test_egypt_angles(self):
        method = get_method(4)
        assert method.fajr_angle_deg == 19.5
        assert method.isha_angle_deg == 17.5

    def test_hanafi_shadow_factor_is_a_registry_entry(self):
        factors = {m.asr_shadow_factor for m in list_methods()}
        assert factors == {1, 2}
        assert Method.KARACHI_HANAFI.value.asr_shadow_factor == 2

    def test_strict_lookup_unknown(self):
        """Id 6 is unassigned; the strict lookup raises a classified input error."""
        with pytest.raises(UnknownMethod) as exc_info:
            get_method(6)
        assert exc_info.value.kind is ErrorKind.UNKNOWN_METHOD
        assert exc_info.value.kind.is_input_error


class TestResolveMethod:

    def test_known_id(self):
        res = resolve_method(3)
        assert res.method.id == 3
        assert res.requested_id == 3
        assert res.fell_back is False

    def test_none_is_default_without_fallback(self):
        res = resolve_method(None)
        assert res.method.id == DEFAULT_METHOD_ID
        assert res.fell_back is False

    @pytest.mark.parametrize("method_id", [0, 6, 16, 999, -1])
    def test_unknown_id_falls_back_visibly(self, method_id):
        res = resolve_method(method_id)
        assert res.method.id == DEFAULT_METHOD_ID
        assert res.requested_id == method_id
        assert res.fell_back is True

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="salahtimes.methods"):
            resolve_method(42)
        assert "42" in caplog.text
