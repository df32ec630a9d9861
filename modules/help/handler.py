from core.actions import OutText


HELP_TRIGGERS = {
    "幫助",
    "說明",
    "指令",
    "指令說明",
}

HELP_TEXT = (
    "歡迎使用塔羅牌抽卡機器人！你可以輸入以下指令：\n"
    "1. 輸入 0-77 的數字，抽取對應編號的塔羅牌。\n"
    "2. 輸入「抽卡」或類似指令，隨機抽取一張塔羅牌。\n"
    "3. 輸入「幫助」查看此說明。\n"
    "4. 輸入「所有卡片」查看所有塔羅牌名稱。\n"
    "祝你有美好的一天！"
)

# stickers, images, locations... anything without text
TEXT_ONLY_TEXT = "目前僅支援文字指令喔！"


def get_help_reply():
    return [OutText(HELP_TEXT)]


def get_text_only_reply():
    return [OutText(TEXT_ONLY_TEXT)]
