from pos_tutorial.pipeline import main

main()
