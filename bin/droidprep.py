#!/usr/bin/python
# ----------------------------------------------------------------------------
# droidprep: command line tool that prepares android platform projects
#
# License: MIT
# ----------------------------------------------------------------------------
'''
Command line tool manager for droidprep
'''

__docformat__ = 'restructuredtext'


# python
import sys
import os
import re
import subprocess
import configparser
from contextlib import contextmanager
import shutil

DROIDPREP_VERSION = '0.7'

# plugins available without any droidprep.ini
DEFAULT_PLUGINS_CFG = '''
[plugins]
project_prepare.DPPluginPrepare
plugin_version.DPPluginVersion
'''


class Logging:
    RED     = '\033[31m'
    GREEN   = '\033[32m'
    YELLOW  = '\033[33m'
    MAGENTA = '\033[35m'
    RESET   = '\033[0m'

    # debug lines are only printed in verbose mode
    _verbose = True

    @staticmethod
    def set_verbose(verbose):
        Logging._verbose = verbose

    @staticmethod
    def _print(s, color=None):
        if color and sys.stdout.isatty() and sys.platform != 'win32':
            print(color + s + Logging.RESET)
        else:
            print(s)

    @staticmethod
    def debug(s):
        if Logging._verbose:
            Logging._print(s, Logging.MAGENTA)

    @staticmethod
    def info(s):
        Logging._print(s, Logging.GREEN)

    @staticmethod
    def warning(s):
        Logging._print(s, Logging.YELLOW)

    @staticmethod
    def error(s):
        Logging._print(s, Logging.RED)


class DPPluginError(Exception):
    pass


class CMDRunner(object):

    @staticmethod
    def run_cmd(command, verbose):
        if verbose:
            Logging.debug("running: '%s'\n" % command)
        else:
            log_path = DPPlugin._log_path()
            command += ' >"%s" 2>&1' % log_path
        ret = subprocess.call(command, shell=True)
        if ret != 0:
            message = "Error running command, return code: %s" % str(ret)
            if not verbose:
                message += ". Check the log file at %s" % log_path
            raise DPPluginError(message)

    @staticmethod
    def convert_path_to_cmd(path):
        r''' Quote a path with spaces so the shell (sh or cmd) runs it as one word.

            eg: on linux: convert '/home/me/my app/hooks/a.sh' to '/home/me/my\ app/hooks/a.sh'
            eg: on windows: convert 'c:\my app\hooks\a.bat' to '"c:\my app\hooks\a.bat"'
        '''
        ret = path
        if os_is_win32():
            ret = '"%s"' % path.replace('"', '')
        else:
            ret = path.replace(' ', '\\ ')

        return ret


#
# Plugins should be a sublass of DPPlugin
#
class DPPlugin(object):

    def _run_cmd(self, command):
        CMDRunner.run_cmd(command, self._verbose)

    @staticmethod
    def _log_path():
        log_dir = os.path.expanduser("~/.droidprep")
        if not os.path.exists(log_dir):
            os.mkdir(log_dir)
        return os.path.join(log_dir, "droidprep.log")

    # returns the plugin name
    @staticmethod
    def plugin_name():
        pass

    # returns help
    @staticmethod
    def brief_description():
        pass

    # Constructor
    def __init__(self):
        pass

    # Setup common options. If a subclass needs custom options,
    # override this method and call super.
    def init(self, args):
        self._verbose = (not args.quiet)
        Logging.set_verbose(self._verbose)

    # Run it
    def run(self, argv):
        pass

    # If a plugin needs to add custom parameters, override this method.
    # There's no need to call super
    def _add_custom_options(self, parser):
        pass

    # If a plugin needs to check custom parameters values after parsing them,
    # override this method.
    # There's no need to call super
    def _check_custom_options(self, args):
        pass

    def parse_args(self, argv):
        from argparse import ArgumentParser
        import droidprep_project

        parser = ArgumentParser(prog="droidprep %s" % self.__class__.plugin_name(),
                                description=self.__class__.brief_description())
        parser.add_argument("-s", "--src",
                          dest="src_dir",
                          help="project base directory")
        parser.add_argument("-q", "--quiet",
                          action="store_true",
                          dest="quiet",
                          help="less output")
        self._add_custom_options(parser)

        (args, unknown) = parser.parse_known_args(argv)

        if args.src_dir is None:
            self._project = droidprep_project.Project(os.path.abspath(os.getcwd()))
        else:
            self._project = droidprep_project.Project(os.path.abspath(args.src_dir))

        args.src_dir = self._project.get_project_dir()
        if args.src_dir is None:
            raise DPPluginError("No directory supplied and found no project at your current directory.\n" +
                "You can set the folder as a parameter with \"-s\" or \"--src\",\n" +
                "or change your current working directory somewhere inside the project.\n"
                "(-h for the usage)")

        self.init(args)
        self._check_custom_options(args)
        return args

# get_class from: http://stackoverflow.com/a/452981
def get_class(kls):
    parts = kls.split('.')
    module = ".".join(parts[:-1])
    if len(parts) == 1:
        m = sys.modules[__name__]
        m = getattr(m, parts[0])
    else:
        m = __import__(module)
        for comp in parts[1:]:
            m = getattr(m, comp)
    return m


### common functions ###

def copy_files_in_dir(src, dst):

    for item in os.listdir(src):
        path = os.path.join(src, item)
        if os.path.isfile(path):
            path = add_path_prefix(path)
            copy_dst = add_path_prefix(dst)
            shutil.copy(path, copy_dst)
        if os.path.isdir(path):
            new_dst = os.path.join(dst, item)
            if not os.path.isdir(new_dst):
                os.makedirs(add_path_prefix(new_dst))
            copy_files_in_dir(path, new_dst)

def copy_files_with_config(config, src_root, dst_root):
    src_dir = config["from"]
    dst_dir = config["to"]

    src_dir = os.path.join(src_root, src_dir)
    dst_dir = os.path.join(dst_root, dst_dir)

    exclude_rules = None
    if "exclude" in config:
        exclude_rules = config["exclude"]
        exclude_rules = convert_rules(exclude_rules)

    copy_files_with_rules(src_dir, src_dir, dst_dir, exclude_rules)

def copy_files_with_rules(src_rootDir, src, dst, exclude = None):
    if os.path.isfile(src):
        if not os.path.exists(dst):
            os.makedirs(add_path_prefix(dst))

        copy_src = add_path_prefix(src)
        copy_dst = add_path_prefix(dst)
        shutil.copy(copy_src, copy_dst)
        return

    if exclude is None:
        if not os.path.exists(dst):
            os.makedirs(add_path_prefix(dst))
        copy_files_in_dir(src, dst)
    else:
        for name in os.listdir(src):
            abs_path = os.path.join(src, name)
            rel_path = os.path.relpath(abs_path, src_rootDir)
            if os.path.isdir(abs_path):
                sub_dst = os.path.join(dst, name)
                copy_files_with_rules(src_rootDir, abs_path, sub_dst, exclude = exclude)
            elif os.path.isfile(abs_path):
                if not _in_rules(rel_path, exclude):
                    if not os.path.exists(dst):
                        os.makedirs(add_path_prefix(dst))

                    abs_path = add_path_prefix(abs_path)
                    copy_dst = add_path_prefix(dst)
                    shutil.copy(abs_path, copy_dst)

def _in_rules(rel_path, rules):
    ret = False
    path_str = rel_path.replace("\\", "/")
    for rule in rules:
        if re.match(rule, path_str):
            ret = True

    return ret

def convert_rules(rules):
    ret_rules = []
    for rule in rules:
        ret = rule.replace('.', '\\.')
        ret = ret.replace('*', '.*')
        ret = "%s$" % ret
        ret_rules.append(ret)

    return ret_rules

def os_is_win32():
    return sys.platform == 'win32'

def add_path_prefix(path_str):
    if not os_is_win32():
        return path_str

    if path_str.startswith("\\\\?\\"):
        return path_str

    ret = "\\\\?\\" + os.path.abspath(path_str)
    ret = ret.replace("/", "\\")
    return ret

# get from http://stackoverflow.com/questions/6194499/python-os-system-pushd
@contextmanager
def pushd(newDir):
    previousDir = os.getcwd()
    os.chdir(newDir)
    try:
        yield
    finally:
        os.chdir(previousDir)


def parse_plugins():
    classes = {}
    cp = configparser.ConfigParser(allow_no_value=True)
    cp.optionxform = str

    cp.read_string(DEFAULT_PLUGINS_CFG)

    # read global config file
    droidprep_path = os.path.dirname(os.path.abspath(__file__))
    cp.read(os.path.join(droidprep_path, "droidprep.ini"))

    # override it with local config
    cp.read(os.path.expanduser("~/.droidprep/droidprep.ini"))

    for s in cp.sections():
        if s == 'plugins':
            for classname in cp.options(s):
                plugin_class = get_class(classname)
                name = plugin_class.plugin_name()
                if name is None:
                    print("Warning: plugin '%s' does not return a plugin name" % classname)
                    continue
                classes[name] = plugin_class

    return classes

def help():
    print("\n%s %s - droidprep: A command line tool that prepares android projects" % (sys.argv[0], DROIDPREP_VERSION))
    print("\nAvailable commands:")
    classes = parse_plugins()
    max_name = max(len(name) for name in classes.keys())
    max_name += 4
    for name in sorted(classes.keys()):
        print("\t%s%s%s" % (name, ' ' * (max_name - len(name)),
                            classes[name].brief_description()))

    print("\nAvailable arguments:")
    print("\t-h, --help\tShow this help information")
    print("\t-v, --version\tShow the version of this command tool")
    print("\nExample:")
    print("\t%s prepare --help" % sys.argv[0])
    print("\t%s version --help" % sys.argv[0])
    sys.exit(-1)

def run_plugin(command, argv, plugins):
    plugin = plugins[command]()

    # "-h" is handled by the plugin's own argument parser
    if len(argv) == 0 or argv[0] not in ('--help', '-h'):
        Logging.info("Running command: %s" % plugin.__class__.plugin_name())
    plugin.run(argv)
    return plugin


def main():
    plugins_path = os.path.join(os.path.dirname(__file__), '..', 'plugins')
    sys.path.append(plugins_path)

    if len(sys.argv) == 1 or sys.argv[1] in ('-h', '--help'):
        help()

    if sys.argv[1] in ('-v', '--version'):
        print("%s" % DROIDPREP_VERSION)
        sys.exit(0)

    try:
        plugins = parse_plugins()
        command = sys.argv[1]
        argv = sys.argv[2:]
        if command in plugins:
            run_plugin(command, argv, plugins)
        else:
            Logging.error("Error: argument '%s' not found" % command)
            Logging.error("Try with %s -h" % sys.argv[0])
            sys.exit(1)

    except DPPluginError as e:
        Logging.error(' '.join(e.args))
        sys.exit(1)


if __name__ == "__main__":
    # plugins import this file as "droidprep", so run through that module
    # to catch the DPPluginError they raise
    import droidprep
    droidprep.main()
