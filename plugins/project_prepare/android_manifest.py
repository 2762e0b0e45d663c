#!/usr/bin/python
# ----------------------------------------------------------------------------
# AndroidManifest.xml access for the droidprep "prepare" plugin
#
# License: MIT
# ----------------------------------------------------------------------------
'''
Read and update the values prepare cares about in AndroidManifest.xml
'''

__docformat__ = 'restructuredtext'

import droidprep
from project_prepare import xml_helpers
from project_prepare.xml_helpers import android_attr

ACTION_MAIN = 'android.intent.action.MAIN'
CATEGORY_LAUNCHER = 'android.intent.category.LAUNCHER'


class Activity(object):
    ''' the main activity of the manifest, setters return self so calls can be chained
    '''

    def __init__(self, elem):
        self._elem = elem

    def _set_or_remove(self, name, value):
        attr = android_attr(name)
        if value:
            self._elem.set(attr, value)
        elif attr in self._elem.attrib:
            del self._elem.attrib[attr]
        return self

    def get_name(self):
        return self._elem.get(android_attr('name'))

    def set_name(self, name):
        return self._set_or_remove('name', name)

    def get_orientation(self):
        return self._elem.get(android_attr('screenOrientation'))

    def set_orientation(self, orientation):
        if orientation and orientation.lower() == 'default':
            orientation = None
        return self._set_or_remove('screenOrientation', orientation)

    def get_launch_mode(self):
        return self._elem.get(android_attr('launchMode'))

    def set_launch_mode(self, launch_mode):
        return self._set_or_remove('launchMode', launch_mode)

    def get_document_launch_mode(self):
        return self._elem.get(android_attr('documentLaunchMode'))

    def set_document_launch_mode(self, launch_mode):
        return self._set_or_remove('documentLaunchMode', launch_mode)


class AndroidManifest(object):

    def __init__(self, path):
        self.path = path
        self.doc = xml_helpers.parse_elementtree(path)
        if self.doc.getroot().tag != 'manifest':
            raise droidprep.DPPluginError('AndroidManifest at %s has incorrect root node name (expected "manifest")' % path)

    def _root(self):
        return self.doc.getroot()

    def get_version_name(self):
        return self._root().get(android_attr('versionName'))

    def set_version_name(self, version):
        self._root().set(android_attr('versionName'), version)
        return self

    def get_version_code(self):
        return self._root().get(android_attr('versionCode'))

    def set_version_code(self, version):
        self._root().set(android_attr('versionCode'), str(version))
        return self

    def get_package_id(self):
        return self._root().get('package')

    def set_package_id(self, pkg_id):
        self._root().set('package', pkg_id)
        return self

    def _uses_sdk(self):
        return self._root().find('uses-sdk')

    def _get_sdk(self, name):
        uses_sdk = self._uses_sdk()
        if uses_sdk is None:
            return None
        return uses_sdk.get(android_attr(name))

    def _set_sdk(self, name, value):
        if not value:
            return self

        uses_sdk = self._uses_sdk()
        if uses_sdk is None:
            uses_sdk = xml_helpers.ET.SubElement(self._root(), 'uses-sdk')
        uses_sdk.set(android_attr(name), str(value))
        return self

    def get_min_sdk_version(self):
        return self._get_sdk('minSdkVersion')

    def set_min_sdk_version(self, value):
        return self._set_sdk('minSdkVersion', value)

    def get_max_sdk_version(self):
        return self._get_sdk('maxSdkVersion')

    def set_max_sdk_version(self, value):
        return self._set_sdk('maxSdkVersion', value)

    def get_target_sdk_version(self):
        return self._get_sdk('targetSdkVersion')

    def set_target_sdk_version(self, value):
        return self._set_sdk('targetSdkVersion', value)

    def get_activity(self):
        activities = self._root().findall('application/activity')
        if len(activities) == 0:
            raise droidprep.DPPluginError('No <activity> found in %s' % self.path)

        for activity in activities:
            for intent_filter in activity.findall('intent-filter'):
                actions = [e.get(android_attr('name')) for e in intent_filter.findall('action')]
                categories = [e.get(android_attr('name')) for e in intent_filter.findall('category')]
                if ACTION_MAIN in actions and CATEGORY_LAUNCHER in categories:
                    return Activity(activity)

        return Activity(activities[0])

    def write(self, path=None):
        xml_helpers.write_elementtree(self.doc, path or self.path, indent=4)
