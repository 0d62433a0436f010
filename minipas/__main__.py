from minipas.main import main

main()
