"""
Webapp Example - converge a site with a cookbook provider.

Run from this directory:
    provisor converge recipe.py --cookbooks cookbooks
"""

declare("webapp", "scratch", docroot="scratch/site")

site = declare("webapp_site", "blog", docroot="scratch/site", banner="Hello from provisor")

declare("log", "site changed", action="nothing")
site.notifies("write", "log[site changed]")
