from mcp_arcgis.cli import main

main()
