pytest_plugins = ["dirtree._pytest_plugin"]
