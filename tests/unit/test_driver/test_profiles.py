# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from utmnet.core.exceptions import ConfigurationError
from utmnet.driver.profiles import UTM_4_5, UTM_4_6, parse_version, select_profile


@pytest.mark.unit
class TestProfiles:
    @pytest.mark.parametrize(
        "version,expected",
        [("4.5", (4, 5)), ("4.6.2", (4, 6)), ("v5", (5, 0)), (" 4.7 (beta)", (4, 7))],
    )
    def test_parse_version(self, version, expected):
        assert parse_version(version) == expected

    @pytest.mark.parametrize(
        "version,profile",
        [("4.5", UTM_4_5), ("4.5.3", UTM_4_5), ("4.6", UTM_4_6), ("4.7.1", UTM_4_6), ("5.0", UTM_4_6)],
    )
    def test_select_newest_matching(self, version, profile):
        assert select_profile(version) is profile

    def test_default_is_4_6(self):
        assert select_profile() is UTM_4_6

    @pytest.mark.parametrize("version", ["4.4", "3.9", "1"])
    def test_too_old(self, version):
        with pytest.raises(ConfigurationError) as ei:
            select_profile(version)
        assert ei.value.code == 2

    @pytest.mark.parametrize("version", ["", "latest", None])
    def test_unrecognized(self, version):
        with pytest.raises(ConfigurationError):
            select_profile(version)

    def test_profiles_are_fully_specified(self):
        for profile in (UTM_4_5, UTM_4_6):
            assert len(profile.scripts()) == 4
            assert all(s.endswith(".applescript") for s in profile.scripts())

    def test_4_5_and_4_6_share_scripts(self):
        assert UTM_4_5.scripts() == UTM_4_6.scripts()
        assert UTM_4_5.min_version < UTM_4_6.min_version
