from edge_map.main import main

main()
