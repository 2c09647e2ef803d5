"""Chart configuration rendering helpers.

Charts in the UI are driven by Chart.js configuration objects built here from
the analysis DTOs. The browser only instantiates them.
"""
