#!/usr/bin/python
# ----------------------------------------------------------------------------
# config.xml reader/writer for the droidprep "prepare" plugin
#
# License: MIT
# ----------------------------------------------------------------------------
'''
Access to the values of an app config.xml
'''

__docformat__ = 'restructuredtext'

import os

from project_prepare import xml_helpers


class StaticResources(list):
    ''' list of icon/splash resources, plus the default one (no size, no density)
    '''

    def __init__(self):
        list.__init__(self)
        self.default_resource = None

    def get_default(self):
        return self.default_resource


class ConfigParser(object):

    def __init__(self, path):
        self.path = path
        self.doc = xml_helpers.parse_elementtree(path)

    def _root(self):
        return self.doc.getroot()

    def _get_node_text_safe(self, tag):
        node = self._root().find(tag)
        if node is None or node.text is None:
            return ''
        return node.text.strip()

    def package_name(self):
        return self._root().get('id')

    def android_package_name(self):
        return self._root().get('android-packageName')

    def name(self):
        return self._get_node_text_safe('name')

    def version(self):
        return self._root().get('version')

    def android_version_code(self):
        return self._root().get('android-versionCode')

    def _find_preference(self, elems, name):
        ret = ''
        for elem in elems:
            pref_name = elem.get('name')
            if pref_name is not None and pref_name.lower() == name.lower():
                ret = elem.get('value') or ''
        return ret

    def get_global_preference(self, name):
        return self._find_preference(self._root().findall('preference'), name)

    def get_platform_preference(self, name, platform):
        return self._find_preference(
            self._root().findall("platform[@name='%s']/preference" % platform), name)

    def get_preference(self, name, platform=None):
        platform_pref = ''
        if platform:
            platform_pref = self.get_platform_preference(name, platform)
        return platform_pref or self.get_global_preference(name)

    def _get_static_resources(self, platform, resource_name):
        elems = []
        if platform:
            # platform specific resources come first
            for elem in self._root().findall("platform[@name='%s']/%s" % (platform, resource_name)):
                elems.append((elem, platform))
        for elem in self._root().findall(resource_name):
            elems.append((elem, None))

        ret = StaticResources()
        for elem, res_platform in elems:
            res = {
                'src': elem.get('src'),
                'density': _density_of(elem),
                'platform': res_platform,
                'width': _int_attr(elem, 'width'),
                'height': _int_attr(elem, 'height'),
                'target': elem.get('target'),
            }
            if not res['width'] and not res['height'] and not res['density']:
                ret.default_resource = res
            ret.append(res)

        return ret

    def get_icons(self, platform=None):
        return self._get_static_resources(platform, 'icon')

    def get_splash_screens(self, platform=None):
        return self._get_static_resources(platform, 'splash')

    def get_hook_scripts(self, hook_type, platform=None):
        ''' src of the <hook type="..."> elements, global ones first
        '''
        elems = self._root().findall("hook[@type='%s']" % hook_type)
        if platform:
            elems += self._root().findall("platform[@name='%s']/hook[@type='%s']" % (platform, hook_type))
        return [elem.get('src') for elem in elems if elem.get('src')]

    def project_root(self):
        return os.path.dirname(os.path.abspath(self.path))

    def write(self):
        xml_helpers.write_elementtree(self.doc, self.path, indent=4)


def _density_of(elem):
    # 'density', 'cdv:density' or 'gap:density'
    for key, value in elem.attrib.items():
        if key == 'density' or key.endswith('}density'):
            return value
    return None


def _int_attr(elem, name):
    value = elem.get(name)
    if not value:
        return None
    try:
        return int(value) or None
    except ValueError:
        return None
