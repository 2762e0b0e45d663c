#!/usr/bin/python
# ----------------------------------------------------------------------------
# droidprep_project: locate a hybrid app project and its platforms
#
# License: MIT
# ----------------------------------------------------------------------------
'''
Project helpers for droidprep
'''

__docformat__ = 'restructuredtext'

import os
import importlib.util

import droidprep


class Project(object):
    CONFIG = 'config.xml'
    WWW = 'www'
    MERGES = 'merges'
    PLATFORMS = 'platforms'

    CUSTOM_STEP_PRE_PREPARE = "pre-prepare"
    CUSTOM_STEP_POST_COPY_WWW = "post-copy-www"
    CUSTOM_STEP_POST_PREPARE = "post-prepare"

    def __init__(self, project_dir):
        self._project_dir = self._find_project_dir(project_dir)
        self._custom_step = None

    def _find_project_dir(self, start_path):
        ''' walk up from start_path until a folder with config.xml and www is found
        '''
        path = start_path
        while True:
            if os.path.isfile(os.path.join(path, Project.CONFIG)) and \
                    os.path.isdir(os.path.join(path, Project.WWW)):
                return path

            parent = os.path.dirname(path)
            if parent == path:
                return None
            path = parent

    def get_project_dir(self):
        return self._project_dir

    def config_path(self):
        return os.path.join(self._project_dir, Project.CONFIG)

    def www_dir(self):
        return os.path.join(self._project_dir, Project.WWW)

    def merges_dir(self, platform):
        return os.path.join(self._project_dir, Project.MERGES, platform)

    def platform_dir(self, platform):
        return os.path.join(self._project_dir, Project.PLATFORMS, platform)

    def load_custom_step_script(self, script_path):
        if not os.path.isabs(script_path):
            script_path = os.path.join(self._project_dir, script_path)

        if not os.path.isfile(script_path):
            raise droidprep.DPPluginError("Custom step script \"%s\" not found" % script_path)

        spec = importlib.util.spec_from_file_location("droidprep_custom_step", script_path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        if not hasattr(module, "handle_event"):
            raise droidprep.DPPluginError("Custom step script \"%s\" has no handle_event()" % script_path)

        self._custom_step = module

    def invoke_custom_step_script(self, event, target_platform, args):
        if self._custom_step is None:
            return

        droidprep.Logging.debug("invoking custom step '%s' for %s" % (event, target_platform))
        self._custom_step.handle_event(event, target_platform, args)
