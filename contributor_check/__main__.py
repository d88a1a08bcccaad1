from contributor_check.runner import main

main()
