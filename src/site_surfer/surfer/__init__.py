"""Website surfing: open a list of sites in a bounded, sliding window of tabs.

Sub-modules:
- ``address``    — scheme normalization and validation of site list entries
- ``site_list``  — reading the site list file
- ``driver``     — browser driver interface and the Playwright backend
- ``scheduler``  — the tab-window scheduler (batching, eviction, pacing)
- ``prompts``    — interactive questions for browser, file and run parameters
- ``runner``     — launches the browser and runs the scheduler
"""
