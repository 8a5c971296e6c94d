from asosuite_cli.mcp_server import main

main()
