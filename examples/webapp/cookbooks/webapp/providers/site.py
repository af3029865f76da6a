"""
webapp_site - deploys a static site; converges its files inline so the site
resource reports whether anything on disk changed.
"""

use_inline_resources()


@action("deploy")
def deploy(self):
    docroot = self.new_resource.docroot
    self.declare(
        "file",
        f"{docroot}/index.html",
        content=f"<h1>{self.new_resource.banner}</h1>\n",
    ).notifies("write", f"log[{self.new_resource.name} content changed]")
    self.declare("file", f"{docroot}/robots.txt", content="User-agent: *\n")
    self.declare("log", f"{self.new_resource.name} content changed", action="nothing")


@action("remove")
def remove(self):
    docroot = self.new_resource.docroot
    self.declare("file", f"{docroot}/index.html", action="delete")
    self.declare("file", f"{docroot}/robots.txt", action="delete")
