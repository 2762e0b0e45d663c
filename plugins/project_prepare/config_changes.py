#!/usr/bin/python
# ----------------------------------------------------------------------------
# config munge recorded by installed plugins
#
# License: MIT
# ----------------------------------------------------------------------------
'''
Re-applies the xml changes recorded in the platform json to the platform files
'''

__docformat__ = 'restructuredtext'

import os
import json

import droidprep
from project_prepare import xml_helpers


class PlatformMunger(object):
    KEY_CONFIG_MUNGE = "config_munge"
    KEY_FILES = "files"
    KEY_PARENTS = "parents"

    EDIT_MODES = ('merge', 'overwrite')

    def __init__(self, platform_root, locations):
        self.platform_root = platform_root
        self.locations = locations
        self._files = {}
        self._namespaces = {}

    def _load_munge(self):
        json_path = self.locations['platform_json']
        if not os.path.isfile(json_path):
            return {}

        try:
            with open(json_path, encoding='utf-8') as f:
                data = json.load(f)
        except ValueError:
            raise droidprep.DPPluginError("Platform json \"%s\" is broken!" % json_path)

        return data.get(PlatformMunger.KEY_CONFIG_MUNGE, {}).get(PlatformMunger.KEY_FILES, {})

    def _target_path(self, file_name):
        base_name = os.path.basename(file_name)
        if base_name == 'config.xml':
            return self.locations['config_xml']
        if base_name == 'AndroidManifest.xml':
            return self.locations['manifest']
        return os.path.join(self.platform_root, file_name)

    def _get_xml(self, path):
        if path not in self._files:
            if not os.path.isfile(path):
                return None
            self._files[path] = xml_helpers.parse_elementtree(path)
            # fragments may use any prefix the target declares, eg. tools:replace
            self._namespaces[path] = xml_helpers.collect_namespaces(path)
        return self._files[path]

    def _edit(self, root, selector, nodes, mode):
        target = xml_helpers.resolve_parent(root, selector)
        if target is None:
            droidprep.Logging.warning("No element found for selector \"%s\", skipped" % selector)
            return

        if mode == 'overwrite':
            target.attrib.clear()
        for node in nodes:
            for name, value in node.attrib.items():
                target.set(name, value)

    def reapply_global_munge(self):
        for file_name, file_munge in self._load_munge().items():
            if not file_name.endswith('.xml'):
                droidprep.Logging.warning("Config munge for \"%s\" is not xml, skipped" % file_name)
                continue

            path = self._target_path(file_name)
            tree = self._get_xml(path)
            if tree is None:
                droidprep.Logging.warning("Config munge target \"%s\" not found" % path)
                continue

            root = tree.getroot()
            for selector, entries in file_munge.get(PlatformMunger.KEY_PARENTS, {}).items():
                for entry in entries:
                    if entry.get('count', 1) <= 0:
                        continue

                    nodes = xml_helpers.parse_fragment(entry['xml'], self._namespaces[path])
                    mode = entry.get('mode')
                    if mode in PlatformMunger.EDIT_MODES:
                        self._edit(root, selector, nodes, mode)
                    elif not xml_helpers.graft_xml(root, nodes, selector, entry.get('after')):
                        droidprep.Logging.warning("Unable to graft xml at selector \"%s\" from \"%s\""
                                                  % (selector, file_name))

        return self

    def save_all(self):
        for path, tree in self._files.items():
            droidprep.Logging.debug("Writing %s" % path)
            xml_helpers.write_elementtree(tree, path, indent=4)
        self._files = {}
        self._namespaces = {}
