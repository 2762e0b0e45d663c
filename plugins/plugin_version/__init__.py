#!/usr/bin/python
# ----------------------------------------------------------------------------
# droidprep "version" plugin
#
# License: MIT
# ----------------------------------------------------------------------------
'''
"version" plugin for droidprep command line tool
'''

__docformat__ = 'restructuredtext'

import os

import droidprep
import droidprep_utils


class DPPluginVersion(droidprep.DPPlugin):

    @staticmethod
    def plugin_name():
        return "version"

    @staticmethod
    def brief_description():
        return "prints the version of droidprep and of the android platform template"

    def _add_custom_options(self, parser):
        parser.add_argument("--platform-dir", dest="platform_dir",
                            help="android platform project directory, default is <project>/platforms/android")

    def _check_custom_options(self, args):
        if args.platform_dir:
            self._platform_root = os.path.abspath(args.platform_dir)
        else:
            self._platform_root = self._project.platform_dir('android')

    def _show_versions(self):
        print('droidprep %s' % droidprep.DROIDPREP_VERSION)

        version = droidprep_utils.get_platform_version(self._platform_root)
        if version is None:
            raise droidprep.DPPluginError("Couldn't find version info in %s" % self._platform_root)
        print('android platform %s' % version)

    def run(self, argv):
        self.parse_args(argv)
        self._show_versions()
