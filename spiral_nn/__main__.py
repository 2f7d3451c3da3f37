from spiral_nn.main import main

main()
