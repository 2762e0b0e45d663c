import os
import sys
from pathlib import Path

import pytest

# Ensure bin/ and plugins/ are importable the same way the console sets them up.
ROOT = Path(__file__).resolve().parents[1]
for sub in ("bin", "plugins"):
    path = str(ROOT / sub)
    if path not in sys.path:
        sys.path.insert(0, path)


APP_CONFIG = """<?xml version='1.0' encoding='utf-8'?>
<widget id="com.example.my-app" version="1.2.3" xmlns="http://www.w3.org/ns/widgets" xmlns:cdv="http://cordova.apache.org/ns/1.0">
    <name>My App</name>
    <description>A sample app</description>
    <author email="dev@example.com">Dev Team</author>
    <content src="index.html" />
    <access origin="*" />
    <preference name="Orientation" value="landscape" />
    <preference name="android-minSdkVersion" value="16" />
    <platform name="android">
        <preference name="android-targetSdkVersion" value="23" />
        <icon src="res/icon/android/icon-hdpi.png" density="hdpi" />
        <icon src="res/icon/android/icon-48.png" width="48" height="48" />
        <splash src="res/screen/android/screen-land-hdpi.png" density="land-hdpi" />
        <splash src="res/screen/android/screen-mdpi.9.png" density="mdpi" />
    </platform>
    <icon src="res/icon/generic-72.png" width="72" />
    <icon src="res/icon/default.png" />
</widget>
"""

DEFAULTS_XML = """<?xml version='1.0' encoding='utf-8'?>
<widget xmlns="http://www.w3.org/ns/widgets" id="io.cordova.helloCordova" version="2.0.0">
    <name>Hello Cordova</name>
    <content src="index.html" />
    <preference name="Orientation" value="default" />
    <preference name="loglevel" value="DEBUG" />
    <feature name="Whitelist">
        <param name="android-package" value="org.apache.cordova.whitelist.WhitelistPlugin" />
    </feature>
</widget>
"""

MANIFEST_XML = """<?xml version='1.0' encoding='utf-8'?>
<manifest android:hardwareAccelerated="true" android:versionCode="1" android:versionName="0.0.1" package="org.example.hello" xmlns:android="http://schemas.android.com/apk/res/android">
    <uses-permission android:name="android.permission.INTERNET" />
    <application android:icon="@drawable/icon" android:label="@string/app_name">
        <activity android:name="MainActivity" android:launchMode="singleTop" android:screenOrientation="portrait">
            <intent-filter android:label="@string/launcher_name">
                <action android:name="android.intent.action.MAIN" />
                <category android:name="android.intent.category.LAUNCHER" />
            </intent-filter>
        </activity>
    </application>
    <uses-sdk android:minSdkVersion="14" android:targetSdkVersion="22" />
</manifest>
"""

STRINGS_XML = """<?xml version='1.0' encoding='utf-8'?>
<resources>
    <string name="app_name">HelloCordova</string>
    <string name="launcher_name">@string/app_name</string>
</resources>
"""

MAIN_ACTIVITY = """package org.example.hello;

import android.os.Bundle;
import org.apache.cordova.*;

public class MainActivity extends CordovaActivity
{
    @Override
    public void onCreate(Bundle savedInstanceState)
    {
        super.onCreate(savedInstanceState);
        loadUrl(launchUrl);
    }
}
"""


def write_file(path, content):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def app_project(tmp_path):
    """A hybrid app with its android platform, laid out like a fresh template."""
    project = tmp_path / "myapp"
    platform = project / "platforms" / "android"

    write_file(project / "config.xml", APP_CONFIG)
    write_file(project / "www" / "index.html", "<html>app</html>")
    write_file(project / "www" / "js" / "index.js", "// app")
    write_file(project / "www" / "js" / "index.js.map", "{}")
    write_file(project / "merges" / "android" / "js" / "index.js", "// android")

    for name in ("icon/android/icon-hdpi.png", "icon/android/icon-48.png",
                 "icon/generic-72.png", "icon/default.png",
                 "screen/android/screen-land-hdpi.png", "screen/android/screen-mdpi.9.png"):
        write_file(project / "res" / name, name.encode("utf-8"))

    write_file(platform / "cordova" / "defaults.xml", DEFAULTS_XML)
    write_file(platform / "cordova" / "version", 'var VERSION = "5.1.1";\n')
    write_file(platform / "platform_www" / "cordova.js", "// cordova")
    write_file(platform / "platform_www" / "index.html", "<html>platform</html>")
    write_file(platform / "AndroidManifest.xml", MANIFEST_XML)
    write_file(platform / "res" / "values" / "strings.xml", STRINGS_XML)
    write_file(platform / "res" / "xml" / "config.xml", DEFAULTS_XML)
    write_file(platform / "res" / "drawable-hdpi" / "icon.png", b"template icon")
    write_file(platform / "res" / "drawable-hdpi" / "screen.png", b"template screen")
    write_file(platform / "res" / "drawable-ldpi" / "icon.9.png", b"template nine patch")
    write_file(platform / "src" / "org" / "example" / "hello" / "MainActivity.java", MAIN_ACTIVITY)

    return project


@pytest.fixture
def platform_root(app_project):
    return str(app_project / "platforms" / "android")


@pytest.fixture
def locations(platform_root):
    from project_prepare.project_prepare import load_locations
    return load_locations(platform_root)


@pytest.fixture(autouse=True)
def _verbose_logging():
    import droidprep
    droidprep.Logging.set_verbose(True)
    yield
    droidprep.Logging.set_verbose(True)


@pytest.fixture
def chdir(monkeypatch):
    def _chdir(path):
        monkeypatch.chdir(os.fspath(path))
    return _chdir
