from thinkprompt_mcp.server import main

main()
