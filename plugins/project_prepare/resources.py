#!/usr/bin/python
# ----------------------------------------------------------------------------
# launcher icons and splash screens for the droidprep "prepare" plugin
#
# License: MIT
# ----------------------------------------------------------------------------
'''
Copy the icon and splash images declared in config.xml into the density folders
'''

__docformat__ = 'restructuredtext'

import os
import glob
import shutil

import droidprep

ICON_NAME = 'icon.png'
SPLASH_NAME = 'screen.png'

# http://developer.android.com/design/style/iconography.html
SIZE_TO_DENSITY = {
    36: 'ldpi',
    48: 'mdpi',
    72: 'hdpi',
    96: 'xhdpi',
    144: 'xxhdpi',
    192: 'xxxhdpi',
}


def copy_image(src, res_dir, density, name):
    if not os.path.isfile(src):
        droidprep.Logging.warning('Image "%s" not found, skipped' % src)
        return False

    if density:
        dest_folder = os.path.join(res_dir, 'drawable-' + density)
    else:
        dest_folder = os.path.join(res_dir, 'drawable')

    # keep the nine-patch suffix
    if src.endswith('.9.png'):
        name = name[:-len('.png')] + '.9.png'

    # the template may have no folder for this density
    if not os.path.isdir(dest_folder):
        os.makedirs(dest_folder)

    dest_path = os.path.join(dest_folder, name)
    droidprep.Logging.debug('copying image from %s to %s' % (src, dest_path))
    shutil.copy(src, dest_path)
    return True


def delete_default_resource_at(platform_root, resource_name):
    ''' remove resource_name (and its .9.png variant) from all drawable-* folders
    '''
    nine_patch_name = resource_name[:-len('.png')] + '.9.png'
    for drawable_folder in sorted(glob.glob(os.path.join(platform_root, 'res', 'drawable-*'))):
        for name in (resource_name, nine_patch_name):
            image_path = os.path.join(drawable_folder, name)
            if os.path.isfile(image_path):
                os.remove(image_path)
                droidprep.Logging.debug('Deleted %s' % image_path)


def _resource_path(project_config, resource):
    # icon and splash sources are relative to the app config.xml
    return os.path.join(project_config.project_root(), resource['src'])


def handle_icons(project_config, platform_root):
    icons = project_config.get_icons('android')

    if len(icons) == 0:
        droidprep.Logging.debug('This app does not have launcher icons defined')
        return

    delete_default_resource_at(platform_root, ICON_NAME)

    android_icons = {}
    default_icon = None

    for icon in icons:
        size = icon['width'] or icon['height']
        if not size and not icon['density']:
            if default_icon:
                droidprep.Logging.debug('more than one default icon: %s' % icon)
            else:
                default_icon = icon
            continue

        density = icon['density'] or SIZE_TO_DENSITY.get(size)
        if not density:
            # unsupported size
            continue

        # platform icons come first and are never replaced
        previous = android_icons.get(density)
        if previous and previous['platform']:
            continue
        android_icons[density] = icon

    res_dir = os.path.join(platform_root, 'res')
    for density, icon in android_icons.items():
        copy_image(_resource_path(project_config, icon), res_dir, density, ICON_NAME)

    # there's no "default" drawable, so assume default == mdpi
    if default_icon and 'mdpi' not in android_icons:
        copy_image(_resource_path(project_config, default_icon), res_dir, 'mdpi', ICON_NAME)


def handle_splashes(project_config, platform_root):
    splashes = project_config.get_splash_screens('android')

    if len(splashes) == 0:
        return

    delete_default_resource_at(platform_root, SPLASH_NAME)
    droidprep.Logging.debug('splash screens: %s' % list(splashes))

    res_dir = os.path.join(platform_root, 'res')
    had_mdpi = False
    for splash in splashes:
        if not splash['density']:
            continue
        if splash['density'] == 'mdpi':
            had_mdpi = True
        copy_image(_resource_path(project_config, splash), res_dir, splash['density'], SPLASH_NAME)

    # there's no "default" drawable, so assume default == mdpi
    default_splash = splashes.get_default()
    if not had_mdpi and default_splash:
        copy_image(_resource_path(project_config, default_splash), res_dir, 'mdpi', SPLASH_NAME)
