from project_prepare.config_parser import ConfigParser

from conftest import write_file


def _config(app_project):
    return ConfigParser(str(app_project / "config.xml"))


def test_widget_values(app_project):
    config = _config(app_project)

    assert config.name() == "My App"
    assert config.package_name() == "com.example.my-app"
    assert config.android_package_name() is None
    assert config.version() == "1.2.3"
    assert config.android_version_code() is None
    assert config.project_root() == str(app_project)


def test_preferences(app_project):
    config = _config(app_project)

    # names compare case-insensitively
    assert config.get_preference("orientation") == "landscape"
    assert config.get_preference("android-targetSdkVersion", "android") == "23"
    assert config.get_preference("android-targetSdkVersion") == ""
    # platform lookup falls back to the global value
    assert config.get_preference("android-minSdkVersion", "android") == "16"
    assert config.get_preference("missing", "android") == ""


def test_icons_list_platform_resources_first(app_project):
    icons = _config(app_project).get_icons("android")

    assert [i["src"] for i in icons] == [
        "res/icon/android/icon-hdpi.png",
        "res/icon/android/icon-48.png",
        "res/icon/generic-72.png",
        "res/icon/default.png",
    ]
    assert icons[0]["platform"] == "android"
    assert icons[0]["density"] == "hdpi"
    assert icons[1]["width"] == 48
    assert icons[2]["platform"] is None
    assert icons[2]["height"] is None
    assert icons.get_default()["src"] == "res/icon/default.png"


def test_icons_without_platform(app_project):
    icons = _config(app_project).get_icons()

    assert len(icons) == 2


def test_splash_screens(app_project):
    splashes = _config(app_project).get_splash_screens("android")

    assert [s["density"] for s in splashes] == ["land-hdpi", "mdpi"]
    assert splashes.get_default() is None


def test_namespaced_density(tmp_path):
    path = write_file(tmp_path / "config.xml",
                      '<widget xmlns="http://www.w3.org/ns/widgets" xmlns:cdv="http://cordova.apache.org/ns/1.0">'
                      '<icon src="a.png" cdv:density="xhdpi" />'
                      '<icon src="b.png" width="bogus" />'
                      '</widget>')

    icons = ConfigParser(str(path)).get_icons("android")

    assert icons[0]["density"] == "xhdpi"
    assert icons[1]["width"] is None
    assert icons.get_default()["src"] == "b.png"


def test_hook_scripts(tmp_path):
    path = write_file(tmp_path / "config.xml",
                      '<widget id="a.b">'
                      '<hook type="before_prepare" src="scripts/global.sh" />'
                      '<hook type="after_prepare" src="scripts/after.sh" />'
                      '<platform name="android"><hook type="before_prepare" src="scripts/android.sh" /></platform>'
                      '<platform name="ios"><hook type="before_prepare" src="scripts/ios.sh" /></platform>'
                      '</widget>')

    config = ConfigParser(str(path))

    assert config.get_hook_scripts("before_prepare", "android") == ["scripts/global.sh", "scripts/android.sh"]
    assert config.get_hook_scripts("after_prepare", "android") == ["scripts/after.sh"]
