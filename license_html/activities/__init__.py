"""Task stages, one module per step of the license workflow.

- poll_licenses: wait for the licenses metafield to be populated
- parse_licenses: decode the metafield value into entries
- render_licenses: build the HTML table
- save_licenses: write the table back as a new metafield
"""
