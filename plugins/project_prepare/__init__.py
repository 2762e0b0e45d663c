from project_prepare.project_prepare import DPPluginPrepare
