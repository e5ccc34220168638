"""
Unit tests for Settings validation and loading.
"""

from pathlib import Path

import pytest

from stackwm.config.settings import DEFAULT_WORKSPACES, ConfigError, Settings


class TestDefaults:
    def test_default_values(self):
        settings = Settings().validate()

        assert settings.margin == 5
        assert settings.workspaces == DEFAULT_WORKSPACES
        assert settings.workspaces[0] == "U"
        assert "Picture-in-Picture" in settings.float_titles
        assert settings.float_apps == frozenset()
        assert dict(settings.app_workspace) == {}
        assert settings.enlarge_ratio == 0.9


class TestValidate:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workspaces": ()},
            {"workspaces": ("U", "II")},
            {"workspaces": ("U", "")},
            {"workspaces": ("U", " ")},
            {"workspaces": ("U", "\t")},
            {"workspaces": ("U", "U")},
            {"workspaces": ("u", "U")},
            {"workspaces": ("U", "I", "i")},
            {"margin": -1},
            {"enlarge_ratio": 0},
            {"enlarge_ratio": 1.5},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigError):
            Settings(**kwargs).validate()

    def test_app_workspace_must_name_declared_workspace(self):
        settings = Settings(app_workspace={"emacs.exe": "Z"})

        with pytest.raises(ConfigError, match="appWorkspace emacs.exe -> Z is invalid"):
            settings.validate()

    def test_case_collision_message(self):
        with pytest.raises(ConfigError, match="differ only by case"):
            Settings(workspaces=("U", "u")).validate()

    def test_non_letters_are_unaffected_by_case_check(self):
        settings = Settings(workspaces=("1", "!", "a", "B"))
        assert settings.validate() is settings

    def test_valid_app_workspace(self):
        settings = Settings(app_workspace={"emacs.exe": "7"})
        assert settings.validate() is settings

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestFromMapping:
    def test_builds_all_fields(self):
        settings = Settings.from_mapping(
            {
                "margin": 8,
                "workspaces": ["A", "B"],
                "float_titles": ["Calculator"],
                "float_apps": ["calc.exe"],
                "app_workspace": {"code.exe": "B"},
                "enlarge_ratio": 0.85,
            }
        )

        assert settings.margin == 8
        assert settings.workspaces == ("A", "B")
        assert settings.float_titles == frozenset({"Calculator"})
        assert settings.float_apps == frozenset({"calc.exe"})
        assert settings.app_workspace["code.exe"] == "B"
        assert settings.enlarge_ratio == 0.85

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="unknown settings: gap"):
            Settings.from_mapping({"gap": 4})

    def test_bad_value(self):
        with pytest.raises(ConfigError):
            Settings.from_mapping({"margin": "wide"})

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"float_titles": "Picture-in-Picture"}, "float_titles must be a list"),
            ({"float_apps": "calc.exe"}, "float_apps must be a list"),
            ({"workspaces": "UIOP"}, "workspaces must be a list"),
            ({"workspaces": ["U", 7]}, "workspaces entries must be strings"),
            ({"margin": True}, "margin must be an integer"),
            ({"margin": "8"}, "margin must be an integer"),
            ({"margin": 4.5}, "margin must be an integer"),
            ({"enlarge_ratio": True}, "enlarge_ratio must be a number"),
            ({"enlarge_ratio": "0.5"}, "enlarge_ratio must be a number"),
            ({"app_workspace": ["emacs.exe"]}, "app_workspace must be a table"),
            ({"app_workspace": {"emacs.exe": 7}}, "app_workspace entries"),
        ],
    )
    def test_wrong_types_are_rejected(self, data, message):
        with pytest.raises(ConfigError, match=message):
            Settings.from_mapping(data)

    def test_bare_string_in_toml_is_rejected(self, tmp_path: Path):
        path = tmp_path / "stackwm.toml"
        path.write_text('float_titles = "Picture-in-Picture"\n', encoding="utf-8")

        with pytest.raises(ConfigError, match="float_titles must be a list"):
            Settings.from_toml(path)

    def test_integer_ratio_is_accepted(self):
        assert Settings.from_mapping({"enlarge_ratio": 1}).enlarge_ratio == 1.0

    def test_validates(self):
        with pytest.raises(ConfigError):
            Settings.from_mapping({"workspaces": []})


class TestFromToml:
    def test_load(self, tmp_path: Path):
        path = tmp_path / "stackwm.toml"
        path.write_text(
            'margin = 10\n'
            'workspaces = ["1", "2", "3"]\n'
            '\n'
            '[app_workspace]\n'
            '"emacs.exe" = "3"\n',
            encoding="utf-8",
        )

        settings = Settings.from_toml(path)

        assert settings.margin == 10
        assert settings.workspaces == ("1", "2", "3")
        assert settings.app_workspace == {"emacs.exe": "3"}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="cannot read config"):
            Settings.from_toml(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "bad.toml"
        path.write_text("margin = = 3\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="invalid TOML"):
            Settings.from_toml(path)

    def test_invalid_mapping_in_file(self, tmp_path: Path):
        path = tmp_path / "bad.toml"
        path.write_text(
            'workspaces = ["1"]\n[app_workspace]\n"x.exe" = "9"\n',
            encoding="utf-8",
        )

        with pytest.raises(ConfigError, match="appWorkspace x.exe -> 9"):
            Settings.from_toml(path)
