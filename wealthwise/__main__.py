from wealthwise.main import main

main()
