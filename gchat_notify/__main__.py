from gchat_notify.main import main

main()
