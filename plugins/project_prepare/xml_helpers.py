#!/usr/bin/python
# ----------------------------------------------------------------------------
# xml helpers for the droidprep "prepare" plugin
#
# License: MIT
# ----------------------------------------------------------------------------
'''
Parsing, writing, merging and grafting of config.xml / AndroidManifest.xml trees
'''

__docformat__ = 'restructuredtext'

import re
import xml.etree.ElementTree as ET

ANDROID_NS = "http://schemas.android.com/apk/res/android"
CDV_NS = "http://cordova.apache.org/ns/1.0"

# prefixes that plugin xml fragments may use without declaring them
FRAGMENT_NAMESPACES = {
    "android": ANDROID_NS,
    "cdv": CDV_NS,
}

# tags that are never merged from the app config
BLACKLIST = ('platform', 'feature', 'plugin', 'engine')
# tags that can appear only once, the app value replaces the default one
SINGLETONS = ('content', 'author', 'name')

ROOT = re.compile(r'^/([^/]*)')
ABSOLUTE = re.compile(r'^/([^/]*)/(.*)')

ET.register_namespace("android", ANDROID_NS)


def android_attr(name):
    return "{%s}%s" % (ANDROID_NS, name)


def collect_namespaces(path):
    namespaces = {}
    for event, (prefix, uri) in ET.iterparse(path, events=('start-ns',)):
        if prefix not in namespaces:
            namespaces[prefix] = uri
    return namespaces


def parse_elementtree(path):
    """ Parse an xml file, keeping comments.
    The default namespace is dropped from the element tags and kept as a plain
    'xmlns' attribute of the root, so lookups like find('name') work on
    config.xml. Prefixed namespaces are registered to be written back as is.
    """
    namespaces = collect_namespaces(path)
    for prefix, uri in namespaces.items():
        if prefix and not re.match(r"ns\d+$", prefix):
            ET.register_namespace(prefix, uri)

    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    tree = ET.parse(path, parser)

    default_ns = namespaces.get('')
    if default_ns:
        ns_prefix = '{%s}' % default_ns
        root = tree.getroot()
        for elem in root.iter():
            if isinstance(elem.tag, str) and elem.tag.startswith(ns_prefix):
                elem.tag = elem.tag[len(ns_prefix):]
        root.set('xmlns', default_ns)

    return tree


def write_elementtree(tree, path, indent=4):
    if isinstance(tree, ET.ElementTree):
        root = tree.getroot()
    else:
        root = tree
    ET.indent(root, space=' ' * indent)
    ET.ElementTree(root).write(path, encoding='utf-8', xml_declaration=True)


def parse_fragment(text, namespaces=None):
    ''' parse a snippet like '<uses-permission android:name="x" />', returns its elements
    namespaces: extra prefix -> uri map, usually the one of the target document
    '''
    declared = dict(FRAGMENT_NAMESPACES)
    for prefix, uri in (namespaces or {}).items():
        if prefix:
            declared[prefix] = uri
    declarations = ' '.join('xmlns:%s="%s"' % (prefix, uri)
                            for prefix, uri in declared.items())
    wrapper = ET.fromstring('<fragment %s>%s</fragment>' % (declarations, text))
    return list(wrapper)


def _is_element(node):
    return isinstance(node.tag, str)


def _strip_all(text):
    return re.sub(r'\s+', '', text or '')


def text_match(one, two):
    text1 = _strip_all(one.text)
    text2 = _strip_all(two.text)
    return text1 == '' or text1 == text2


def attrib_match(one, two):
    return dict(one.attrib) == dict(two.attrib)


def equal_nodes(one, two):
    if one.tag != two.tag:
        return False
    if (one.text or '').strip() != (two.text or '').strip():
        return False

    one_children = [c for c in one if _is_element(c)]
    two_children = [c for c in two if _is_element(c)]
    if len(one_children) != len(two_children):
        return False
    if not attrib_match(one, two):
        return False

    for child1, child2 in zip(one_children, two_children):
        if not equal_nodes(child1, child2):
            return False
    return True


def merge_xml(src, dest, platform=None, clobber=False):
    """ Merge the src element into dest.
    Arg:
        src: element of the app config
        dest: element of the platform config, modified in place
        platform: children of <platform name="..."> are merged as top-level ones
        clobber: overwrite attributes and text that dest already has
    """
    if src.tag in BLACKLIST:
        return

    for name, value in src.attrib.items():
        if clobber or not dest.get(name):
            dest.set(name, value)

    if src.text and src.text.strip() and (clobber or not (dest.text and dest.text.strip())):
        dest.text = src.text

    def merge_child(src_child):
        src_tag = src_child.tag
        dest_child = ET.Element(src_tag)
        should_merge = True

        if src_tag in BLACKLIST:
            return

        if src_tag in SINGLETONS:
            found = dest.find(src_tag)
            if found is not None:
                dest_child = found
                dest.remove(found)
        else:
            # an exact match is merged in place, never duplicated
            candidates = [c for c in dest.findall(src_tag)
                          if text_match(src_child, c) and attrib_match(src_child, c)]
            if len(candidates) > 0:
                dest_child = candidates[0]
                dest.remove(dest_child)
                should_merge = False

        merge_xml(src_child, dest_child, platform, clobber and should_merge)
        dest.append(dest_child)

    for child in list(src):
        if _is_element(child):
            merge_child(child)

    if platform:
        for platform_elem in src.findall("platform[@name='%s']" % platform):
            for child in list(platform_elem):
                if _is_element(child):
                    merge_child(child)

    _remove_duplicate_preferences(dest)


def _remove_duplicate_preferences(elem):
    prefs = elem.findall('preference[@name][@value]')
    pref_values = {}
    for pref in prefs:
        pref_values[pref.get('name')] = pref.get('value')

    for pref in prefs:
        elem.remove(pref)

    for name, value in pref_values.items():
        ET.SubElement(elem, 'preference', name=name, value=value)


def resolve_parent(root, selector):
    match = ROOT.match(selector)
    if match is None:
        return root.find(selector)

    tag_name = match.group(1)
    if tag_name != '*' and tag_name != root.tag:
        return None

    parent = root
    # absolute path that does not select the root itself
    match = ABSOLUTE.match(selector)
    if match and match.group(2):
        parent = parent.find(match.group(2))
    return parent


def _find_insert_idx(children, after):
    tags = [child.tag for child in children]
    for tag in after.split(';'):
        if tag in tags:
            return len(tags) - 1 - tags[::-1].index(tag) + 1

    # no matching nodes, add to the beginning
    return 0


def _unique_child(node, parent):
    for child in parent.findall(node.tag):
        if equal_nodes(node, child):
            return False
    return True


def graft_xml(root, nodes, selector, after=None):
    """ Insert nodes under the element found by selector.
    Missing parents are created. Nodes equal to an existing child are skipped.
    Returns False when no parent can be found or created.
    """
    parent = resolve_parent(root, selector)
    if parent is None:
        if '/' in selector:
            parent_selector, _, parent_tag = selector.rpartition('/')
        else:
            parent_selector, parent_tag = '.', selector

        if not parent_tag or parent_selector in ('', '/'):
            return False
        if not graft_xml(root, [ET.Element(parent_tag)], parent_selector):
            return False

        parent = resolve_parent(root, selector)
        if parent is None:
            return False

    for node in nodes:
        if _unique_child(node, parent):
            children = list(parent)
            insert_idx = _find_insert_idx(children, after) if after else len(children)
            parent.insert(insert_idx, node)

    return True
