"""
webapp - writes a marker file. Declared resources join the caller's run,
so they can be notified by recipe resources.
"""


@action("setup")
def setup(self):
    self.declare("file", f"{self.new_resource.docroot}/.webapp", content="managed\n")
