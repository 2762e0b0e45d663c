#!/usr/bin/python
#-*- coding: utf-8 -*-

import os
import sys
import shutil
import re

import droidprep


def rmdir(folder):
    if os.path.exists(folder):
        if sys.platform == 'win32':
            droidprep.CMDRunner.run_cmd("rd /s/q \"%s\"" % folder, verbose=True)
        else:
            shutil.rmtree(folder)

def remove_empty_dirs(start_dir, stop_dir):
    ''' remove start_dir and its parents while they are empty, stop_dir itself is kept
    '''
    current_dir = os.path.abspath(start_dir)
    stop_dir = os.path.abspath(stop_dir)
    while current_dir != stop_dir and current_dir.startswith(stop_dir):
        if os.path.isdir(current_dir) and len(os.listdir(current_dir)) == 0:
            os.rmdir(current_dir)
            current_dir = os.path.dirname(current_dir)
        else:
            break

def file_contains(filepath, pattern):
    with open(filepath, encoding='utf-8') as f:
        return re.search(pattern, f.read()) is not None

def sed_to(src_path, pattern, replacement, dst_path):
    """ Replace the first match of pattern in src_path, write result to dst_path
    Arg:
        src_path: file to read
        pattern: regular expression
        replacement: new string
        dst_path: file to write, can be the same as src_path
    """
    with open(src_path, encoding='utf-8') as f:
        content = f.read()

    content = re.sub(pattern, lambda m: replacement, content, count=1)

    dst_dir = os.path.dirname(dst_path)
    if dst_dir and not os.path.isdir(dst_dir):
        os.makedirs(dst_dir)
    with open(dst_path, 'w', encoding='utf-8') as f:
        f.write(content)

VERSION_FILE_PATH = 'cordova/version'
VERSION_PATTERN = r".*VERSION[ \t]*=[ \t]*[\"']([^\"']+)[\"']"
def get_platform_version(platform_root):
    ret = None

    version_file = os.path.join(platform_root, VERSION_FILE_PATH)
    if os.path.isfile(version_file):
        with open(version_file, encoding='utf-8') as f:
            for line in f:
                match = re.match(VERSION_PATTERN, line)
                if match:
                    ret = match.group(1)
                    break

    return ret
