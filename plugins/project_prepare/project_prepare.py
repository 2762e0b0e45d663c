#!/usr/bin/python
# ----------------------------------------------------------------------------
# droidprep "prepare" plugin
#
# License: MIT
# ----------------------------------------------------------------------------
'''
"prepare" plugin for droidprep command line tool
'''

__docformat__ = 'restructuredtext'

import os
import re
import glob
import json
import shutil

import droidprep
import droidprep_utils
from droidprep_project import Project
from project_prepare import xml_helpers
from project_prepare.config_parser import ConfigParser
from project_prepare.android_manifest import AndroidManifest
from project_prepare.config_changes import PlatformMunger
from project_prepare import resources

PLATFORM = 'android'
LOCATIONS_FILE = 'locations.json'
PREPARE_CFG_FILE = 'prepare-cfg.json'

# keys of locations.json that are paths relative to the platform root
PATH_KEYS = ('config_xml', 'default_config_xml', 'strings', 'manifest', 'www',
             'platform_www', 'java_src', 'res', 'platform_json')

LAUNCH_MODES = ['standard', 'singleTop', 'singleTask', 'singleInstance']
DOCUMENT_LAUNCH_MODES = ['intoExisting', 'always', 'none', 'never']
GLOBAL_ORIENTATIONS = ['default', 'portrait', 'landscape']


def load_locations(platform_root):
    ''' locations.json defaults, overridden by <platform_root>/prepare-cfg.json
    '''
    script_dir = os.path.abspath(os.path.dirname(__file__))
    with open(os.path.join(script_dir, LOCATIONS_FILE), encoding='utf-8') as f:
        cfg = json.load(f)

    cfg_path = os.path.join(platform_root, PREPARE_CFG_FILE)
    if os.path.isfile(cfg_path):
        try:
            with open(cfg_path, encoding='utf-8') as f:
                cfg.update(json.load(f))
        except ValueError:
            raise droidprep.DPPluginError("Configuration file \"%s\" is broken!" % cfg_path)

    locations = {'root': platform_root}
    for key, value in cfg.items():
        if key in PATH_KEYS:
            value = os.path.join(platform_root, value)
        locations[key] = value

    return locations


def update_config_files_from(source_config, config_munger, locations):
    """ Rebuild the platform config.xml.
    Arg:
        source_config: ConfigParser of the app config.xml
        config_munger: PlatformMunger holding the changes of installed plugins
        locations: platform locations
    Returns the ConfigParser of the written platform config.xml
    """
    droidprep.Logging.debug('Generating config.xml from defaults for platform "%s"' % PLATFORM)

    # start over from the platform defaults
    config_dir = os.path.dirname(locations['config_xml'])
    if not os.path.isdir(config_dir):
        os.makedirs(config_dir)
    shutil.copy(locations['default_config_xml'], locations['config_xml'])

    # changes recorded by the installed plugins
    config_munger.reapply_global_munge().save_all()

    # then the app config.xml
    config = ConfigParser(locations['config_xml'])
    xml_helpers.merge_xml(source_config.doc.getroot(), config.doc.getroot(), PLATFORM, clobber=True)

    config.write()
    return config


def update_www_from(project, locations):
    ''' replace the platform www with app www, then platform_www, then merges/android
    '''
    www_dir = locations['www']
    droidprep_utils.rmdir(www_dir)
    os.makedirs(www_dir)

    exclude = locations.get('www_exclude')
    if exclude:
        copy_cfg = {
            "from": ".",
            "to": ".",
            "exclude": exclude
        }
        droidprep.copy_files_with_config(copy_cfg, project.www_dir(), www_dir)
    else:
        droidprep.copy_files_in_dir(project.www_dir(), www_dir)

    if os.path.isdir(locations['platform_www']):
        droidprep.copy_files_in_dir(locations['platform_www'], www_dir)

    merges_path = project.merges_dir(PLATFORM)
    if os.path.isdir(merges_path):
        droidprep.Logging.debug('Found "merges" for %s platform. Copying over existing "www" files.' % PLATFORM)
        droidprep.copy_files_in_dir(merges_path, www_dir)


def _update_app_name(name, strings_path):
    strings = xml_helpers.parse_elementtree(strings_path)
    app_name = strings.getroot().find("string[@name='app_name']")
    if app_name is None:
        app_name = xml_helpers.ET.SubElement(strings.getroot(), 'string', name='app_name')
    app_name.text = name
    xml_helpers.write_elementtree(strings, strings_path, indent=4)
    droidprep.Logging.debug('Wrote out Android application name to "%s"' % name)


def _relocate_activity(orig_pkg, pkg, locations):
    java_src = locations['java_src']
    base_class = locations['activity_base_class']

    java_pattern = os.path.join(java_src, *(orig_pkg.split('.') + ['*.java']))
    # subclasses like CordovaActivityBase count too
    extends_pattern = r'extends\s+%s' % re.escape(base_class)
    java_files = [f for f in sorted(glob.glob(java_pattern))
                  if droidprep_utils.file_contains(f, extends_pattern)]

    if len(java_files) == 0:
        raise droidprep.DPPluginError('No Java files found which extend %s.' % base_class)
    elif len(java_files) > 1:
        droidprep.Logging.info('Multiple candidate Java files (.java files which extend %s) found. '
                               'Guessing at the first one, %s' % (base_class, java_files[0]))

    dest_file = os.path.join(java_src, *(pkg.split('.') + [os.path.basename(java_files[0])]))
    droidprep_utils.sed_to(java_files[0], r'package [\w\.]*;', 'package %s;' % pkg, dest_file)
    droidprep.Logging.debug('Wrote out Android package name to "%s"' % pkg)

    if orig_pkg != pkg:
        # the package changed, drop the old main activity and its empty folders
        os.remove(java_files[0])
        droidprep_utils.remove_empty_dirs(os.path.dirname(java_files[0]), java_src)

    return dest_file


def update_project_according_to(platform_config, locations):
    ''' update strings.xml, AndroidManifest.xml and the main activity package
    '''
    _update_app_name(platform_config.name(), locations['strings'])

    # java packages cannot contain dashes
    pkg = platform_config.android_package_name() or platform_config.package_name()
    if not pkg:
        raise droidprep.DPPluginError('No package name found in config.xml, set the "id" of <widget>')
    pkg = pkg.replace('-', '_')

    manifest = AndroidManifest(locations['manifest'])
    orig_pkg = manifest.get_package_id()
    if not orig_pkg:
        raise droidprep.DPPluginError('No package found in %s' % locations['manifest'])

    manifest.get_activity() \
        .set_orientation(find_orientation_value(platform_config)) \
        .set_launch_mode(find_android_launch_mode_preference(platform_config)) \
        .set_document_launch_mode(find_android_document_launch_mode_preference(platform_config))

    version = platform_config.version()
    if version:
        manifest.set_version_name(version)

    version_code = platform_config.android_version_code()
    if not version_code and version:
        version_code = default_version_code(version)
    if version_code is not None:
        manifest.set_version_code(version_code)

    manifest.set_package_id(pkg) \
        .set_min_sdk_version(platform_config.get_preference('android-minSdkVersion', PLATFORM)) \
        .set_max_sdk_version(platform_config.get_preference('android-maxSdkVersion', PLATFORM)) \
        .set_target_sdk_version(platform_config.get_preference('android-targetSdkVersion', PLATFORM)) \
        .write()

    _relocate_activity(orig_pkg, pkg, locations)


# Construct the default value for versionCode as
# PATCH + MINOR * 100 + MAJOR * 10000
# see http://developer.android.com/tools/publishing/versioning.html
def default_version_code(version):
    nums = version.split('-')[0].split('.')
    version_code = 0
    for factor, num in zip((10000, 100, 1), nums):
        # plain digits only, '1_0' or ' 1' count as 0
        if num.isdigit():
            version_code += int(num) * factor
    return version_code


def find_android_launch_mode_preference(platform_config):
    launch_mode = platform_config.get_preference('AndroidLaunchMode')
    if not launch_mode:
        return 'singleTop'

    # warn, but keep the value in case the list of options changes
    if launch_mode not in LAUNCH_MODES:
        droidprep.Logging.warning('Unrecognized value for AndroidLaunchMode preference: %s. Expected values are: %s'
                                  % (launch_mode, ', '.join(LAUNCH_MODES)))

    return launch_mode


def find_orientation_value(platform_config):
    ''' global orientation preference, 'default' when missing or unsupported
    '''
    orientation_default = 'default'

    orientation = platform_config.get_preference('orientation')
    if not orientation:
        return orientation_default

    if orientation.lower() in GLOBAL_ORIENTATIONS:
        return orientation

    droidprep.Logging.warning('Unsupported global orientation: %s. Defaulting to value: %s'
                              % (orientation, orientation_default))
    return orientation_default


def find_android_document_launch_mode_preference(platform_config):
    launch_mode = platform_config.get_preference('AndroidDocumentLaunchMode')
    if not launch_mode:
        return 'none'

    if launch_mode not in DOCUMENT_LAUNCH_MODES:
        droidprep.Logging.warning('Unrecognized value for AndroidDocumentLaunchMode preference: %s. Expected values are: %s'
                                  % (launch_mode, ', '.join(DOCUMENT_LAUNCH_MODES)))
    elif launch_mode not in ('none', 'never'):
        if find_android_launch_mode_preference(platform_config) != 'standard':
            droidprep.Logging.warning('For values other than "none" and "never" the activity must be defined with launchMode="standard"')

    return launch_mode


class DPPluginPrepare(droidprep.DPPlugin):
    """
    prepares the android platform of a project
    """

    @staticmethod
    def plugin_name():
        return "prepare"

    @staticmethod
    def brief_description():
        return "Copies config.xml, www and resources into the android platform project"

    def _add_custom_options(self, parser):
        parser.add_argument("--platform-dir", dest="platform_dir",
                            help="android platform project directory, default is <project>/platforms/android")

    def _check_custom_options(self, args):
        if args.platform_dir:
            self._platform_root = os.path.abspath(args.platform_dir)
        else:
            self._platform_root = self._project.platform_dir(PLATFORM)

        if not os.path.isdir(self._platform_root):
            raise droidprep.DPPluginError("Can't find the android platform at \"%s\"" % self._platform_root)

    def _run_hooks(self, project_config, hook_type):
        project_dir = self._project.get_project_dir()
        for src in project_config.get_hook_scripts(hook_type, PLATFORM):
            script_path = os.path.join(project_dir, src)
            droidprep.Logging.info("Running %s hook: %s" % (hook_type, src))
            with droidprep.pushd(project_dir):
                self._run_cmd(droidprep.CMDRunner.convert_path_to_cmd(script_path))

    def prepare(self):
        project = self._project
        platform_root = self._platform_root
        locations = load_locations(platform_root)

        if locations.get('custom_step_script'):
            project.load_custom_step_script(locations['custom_step_script'])

        project_config = ConfigParser(project.config_path())
        custom_step_args = {
            "project-root": project.get_project_dir(),
            "platform-root": platform_root,
        }

        self._run_hooks(project_config, 'before_prepare')
        project.invoke_custom_step_script(Project.CUSTOM_STEP_PRE_PREPARE, PLATFORM, custom_step_args.copy())

        munger = PlatformMunger(platform_root, locations)
        self._config = update_config_files_from(project_config, munger, locations)

        update_www_from(project, locations)
        www_step_args = custom_step_args.copy()
        www_step_args["www-dir"] = locations['www']
        project.invoke_custom_step_script(Project.CUSTOM_STEP_POST_COPY_WWW, PLATFORM, www_step_args)

        update_project_according_to(self._config, locations)

        resources.handle_icons(project_config, platform_root)
        resources.handle_splashes(project_config, platform_root)

        project.invoke_custom_step_script(Project.CUSTOM_STEP_POST_PREPARE, PLATFORM, custom_step_args.copy())
        self._run_hooks(project_config, 'after_prepare')

        droidprep.Logging.debug('updated project successfully')

    def run(self, argv):
        self.parse_args(argv)
        self.prepare()
