"""Static datasets used when no LLM or database is reachable."""
from datetime import date
from typing import Dict, List, Optional

COMPANIES = [
    {
        "id": "c001",
        "name": "深瞳医疗科技",
        "city": "上海",
        "province": "上海",
        "industry": ["AI", "医疗健康"],
        "track": "AI医学影像",
        "register_year": 2019,
        "last_round": "B轮",
        "last_round_date": "2024-03-18",
        "last_round_amount": "3亿元人民币",
        "investors": ["红杉中国", "启明创投", "张江科投"],
        "headline": "深瞳医疗完成3亿元B轮融资，加速肺结节AI产品商业化",
        "business_summary": "聚焦AI医学影像辅助诊断，产品覆盖肺结节、乳腺、骨折等场景，已获两张NMPA三类证。",
        "news_snippet": "本轮融资将用于多病种产品研发及三甲医院渠道拓展，目前已进入300余家医院。",
        "growth_stage": "快速增长",
        "tags": ["三类医疗器械证", "三甲医院覆盖"],
    },
    {
        "id": "c002",
        "name": "苏州灵犀机器人",
        "city": "苏州",
        "province": "江苏",
        "industry": ["机器人", "智能制造"],
        "track": "协作机器人",
        "register_year": 2017,
        "last_round": "C轮",
        "last_round_date": "2023-11-06",
        "last_round_amount": "5亿元人民币",
        "investors": ["高瓴创投", "元禾控股", "苏州工业园区产业基金"],
        "headline": "灵犀机器人C轮融资5亿元，协作机器人年出货量破万台",
        "business_summary": "研发生产轻量级协作机器人及配套视觉系统，服务3C电子、汽车零部件和新能源电池产线。",
        "news_snippet": "公司新建的年产2万台协作机器人基地已在苏州工业园区投产。",
        "growth_stage": "快速增长",
        "tags": ["量产", "出口欧洲"],
    },
    {
        "id": "c003",
        "name": "杭州云栈数据",
        "city": "杭州",
        "province": "浙江",
        "industry": ["SaaS", "大数据"],
        "track": "企业数据中台",
        "register_year": 2016,
        "last_round": "C+轮",
        "last_round_date": "2022-08-22",
        "last_round_amount": "2亿元人民币",
        "investors": ["经纬创投", "阿里巴巴"],
        "headline": "云栈数据获2亿元C+轮融资，布局制造业数据中台",
        "business_summary": "提供面向中大型企业的数据中台与BI SaaS产品，客户覆盖零售、制造和金融行业。",
        "news_snippet": "公司年度经常性收入同比增长60%，净收入留存率超过120%。",
        "growth_stage": "成熟期",
        "tags": ["头部客户", "高续费率"],
    },
    {
        "id": "c004",
        "name": "合肥晶芯半导体",
        "city": "合肥",
        "province": "安徽",
        "industry": ["芯片", "半导体"],
        "track": "车规级MCU",
        "register_year": 2020,
        "last_round": "A+轮",
        "last_round_date": "2024-06-12",
        "last_round_amount": "4亿元人民币",
        "investors": ["合肥产投", "深创投", "小米长江产业基金"],
        "headline": "晶芯半导体完成4亿元A+轮融资，车规MCU通过AEC-Q100认证",
        "business_summary": "设计车规级微控制器芯片，产品用于车身控制和新能源三电系统，已导入多家整车厂供应链。",
        "news_snippet": "首款车规级MCU累计出货超过500万颗。",
        "growth_stage": "快速增长",
        "tags": ["车规认证", "国产替代"],
    },
    {
        "id": "c005",
        "name": "北京智源脑科技",
        "city": "北京",
        "province": "北京",
        "industry": ["脑机接口", "医疗健康"],
        "track": "非侵入式脑机接口",
        "register_year": 2021,
        "last_round": "天使轮",
        "last_round_date": "2023-04-10",
        "last_round_amount": "5000万元人民币",
        "investors": ["真格基金", "中关村发展集团"],
        "headline": "智源脑科技获5000万元天使轮融资，研发康复用脑机接口设备",
        "business_summary": "研发基于脑电信号的非侵入式脑机接口设备，首个应用方向为中风患者上肢康复训练。",
        "news_snippet": "产品已在两家三甲医院开展临床试验。",
        "growth_stage": "早期",
        "tags": ["临床试验", "高校团队"],
    },
    {
        "id": "c006",
        "name": "深圳储能时代",
        "city": "深圳",
        "province": "广东",
        "industry": ["新能源"],
        "track": "工商业储能",
        "register_year": 2018,
        "last_round": "B+轮",
        "last_round_date": "2024-01-25",
        "last_round_amount": "8亿元人民币",
        "investors": ["IDG资本", "深创投", "宁德时代"],
        "headline": "储能时代完成8亿元B+轮融资，工商业储能装机量跻身行业前五",
        "business_summary": "提供工商业储能系统集成及能量管理平台，业务覆盖国内及东南亚市场。",
        "news_snippet": "2023年新增装机超过1GWh，海外订单占比提升至35%。",
        "growth_stage": "快速增长",
        "tags": ["出口", "扩张"],
    },
    {
        "id": "c007",
        "name": "南京微纳新材",
        "city": "南京",
        "province": "江苏",
        "industry": ["新材料"],
        "track": "电子级石墨烯导热膜",
        "register_year": 2015,
        "last_round": "D轮",
        "last_round_date": "2023-09-14",
        "last_round_amount": "6亿元人民币",
        "investors": ["国投创新", "南京创投", "顺为资本"],
        "headline": "微纳新材D轮融资6亿元，启动科创板上市辅导",
        "business_summary": "生产石墨烯导热膜及电子散热材料，主要客户为消费电子和新能源汽车企业。",
        "news_snippet": "公司已完成上市辅导备案，计划在科创板上市。",
        "growth_stage": "成熟期",
        "tags": ["量产", "拟上市"],
    },
    {
        "id": "c008",
        "name": "成都极光自动驾驶",
        "city": "成都",
        "province": "四川",
        "industry": ["自动驾驶", "AI"],
        "track": "矿区无人运输",
        "register_year": 2019,
        "last_round": "B轮",
        "last_round_date": "2023-07-03",
        "last_round_amount": "3.5亿元人民币",
        "investors": ["北极光创投", "成都科创投"],
        "headline": "极光自动驾驶获3.5亿元B轮融资，矿区无人驾驶车队规模超200台",
        "business_summary": "为露天矿山提供无人驾驶运输整体解决方案，包括线控改装、调度系统和运营服务。",
        "news_snippet": "已在内蒙古、新疆等地6座矿山实现常态化无人运营。",
        "growth_stage": "快速增长",
        "tags": ["商业化", "头部客户"],
    },
    {
        "id": "c009",
        "name": "广州启元基因",
        "city": "广州",
        "province": "广东",
        "industry": ["基因", "生物医药"],
        "track": "基因治疗CDMO",
        "register_year": 2018,
        "last_round": "B轮",
        "last_round_date": "2022-12-19",
        "last_round_amount": "4亿元人民币",
        "investors": ["礼来亚洲基金", "广州产投"],
        "headline": "启元基因完成4亿元B轮融资，建设病毒载体GMP产线",
        "business_summary": "提供AAV、慢病毒等基因治疗载体的工艺开发与GMP生产服务。",
        "news_snippet": "新建的2000L病毒载体GMP产线预计明年投产。",
        "growth_stage": "快速增长",
        "tags": ["GMP产线", "海外客户"],
    },
    {
        "id": "c010",
        "name": "无锡量子计测",
        "city": "无锡",
        "province": "江苏",
        "industry": ["量子"],
        "track": "量子精密测量",
        "register_year": 2021,
        "last_round": "Pre-A轮",
        "last_round_date": "2024-02-28",
        "last_round_amount": "1亿元人民币",
        "investors": ["中科创星", "无锡创投"],
        "headline": "量子计测完成1亿元Pre-A轮融资，量子磁力计进入工程样机阶段",
        "business_summary": "研发基于原子系综的量子磁力计和量子重力仪，面向地质勘探和工业检测。",
        "news_snippet": "工程样机正在油气勘探场景开展现场试验。",
        "growth_stage": "早期",
        "tags": ["试验", "科研院所转化"],
    },
    {
        "id": "c011",
        "name": "武汉光谷物联",
        "city": "武汉",
        "province": "湖北",
        "industry": ["物流", "大数据"],
        "track": "智慧冷链物流",
        "register_year": 2017,
        "last_round": "A轮",
        "last_round_date": "2023-05-16",
        "last_round_amount": "1.2亿元人民币",
        "investors": ["武汉光谷创投", "腾讯投资"],
        "headline": "光谷物联A轮融资1.2亿元，冷链监控设备接入超10万台",
        "business_summary": "提供冷链运输温控物联网设备和可视化调度平台，服务医药和生鲜流通企业。",
        "news_snippet": "平台接入冷链车辆和冷库设备超过10万台。",
        "growth_stage": "快速增长",
        "tags": ["商业化"],
    },
    {
        "id": "c012",
        "name": "西安星图遥感",
        "city": "西安",
        "province": "陕西",
        "industry": ["大数据", "AI"],
        "track": "商业遥感数据服务",
        "register_year": 2016,
        "last_round": "C轮",
        "last_round_date": "2024-04-09",
        "last_round_amount": "7亿元人民币",
        "investors": ["国新基金", "陕西金控"],
        "headline": "星图遥感C轮融资7亿元，自研遥感卫星星座组网",
        "business_summary": "运营商业遥感卫星并提供数据处理与行业应用，服务自然资源、应急和农业部门。",
        "news_snippet": "计划年内新发射4颗高分辨率光学遥感卫星。",
        "growth_stage": "成熟期",
        "tags": ["政府客户"],
    },
]

FALLBACK_NEWS = [
    {
        "id": "fallback-1",
        "title": "人工智能初创公司完成新一轮融资",
        "company": "AI科技",
        "industry": "人工智能",
        "category": "tech",
        "amount": "数千万美元",
        "investors": "知名投资机构",
        "content": "近期，多家人工智能领域的初创公司相继完成新一轮融资，反映出资本市场对AI技术的持续看好。",
        "thumbnail": "https://images.unsplash.com/photo-1677442136019-21780ecad995?w=400&h=300&fit=crop",
    },
    {
        "id": "fallback-2",
        "title": "新能源企业获得战略投资",
        "company": "绿能科技",
        "industry": "新能源",
        "category": "energy",
        "amount": "亿元级别",
        "investors": "产业资本",
        "content": "随着碳中和目标的推进，新能源领域持续受到资本关注，多家企业获得重要融资。",
        "thumbnail": "https://images.unsplash.com/photo-1509391366360-2e959784a276?w=400&h=300&fit=crop",
    },
    {
        "id": "fallback-3",
        "title": "医疗健康赛道融资活跃",
        "company": "生物医药",
        "industry": "医疗健康",
        "category": "healthcare",
        "amount": "数亿元",
        "investors": "医疗产业基金",
        "content": "医疗健康领域的创新企业持续获得资本青睐，生物医药、医疗器械等细分赛道表现活跃。",
        "thumbnail": "https://images.unsplash.com/photo-1576091160399-112ba8d25d1f?w=400&h=300&fit=crop",
    },
    {
        "id": "fallback-4",
        "title": "消费科技公司完成B轮融资",
        "company": "智能消费",
        "industry": "消费科技",
        "category": "consumer",
        "amount": "千万美元",
        "investors": "消费领域投资人",
        "content": "消费科技领域的创新企业受到市场关注，智能硬件、消费电子等方向持续获得投资。",
        "thumbnail": "https://images.unsplash.com/photo-1556742049-0cfed4f6a45d?w=400&h=300&fit=crop",
    },
    {
        "id": "fallback-5",
        "title": "企业服务SaaS获得融资",
        "company": "云服务商",
        "industry": "企业服务",
        "category": "enterprise",
        "amount": "数千万元",
        "investors": "SaaS投资机构",
        "content": "企业数字化转型加速，SaaS服务商持续获得资本支持，云计算、协同办公等领域表现突出。",
        "thumbnail": "https://images.unsplash.com/photo-1460925895917-afdab827c52f?w=400&h=300&fit=crop",
    },
]

EXAMPLE_REQUIREMENTS = [
    "找2023年以后在长三角做AI医疗，完成A/B轮融资的公司",
    "适合深圳智能制造产业园的机器人企业，最好有头部基金投资",
    "华东地区新能源相关企业，处于快速增长期",
]


def get_companies() -> List[Dict]:
    return [dict(company) for company in COMPANIES]


def get_fallback_news(today: Optional[date] = None) -> List[Dict]:
    """Fallback news stamped with today's date, so the panel never looks stale."""
    publish_date = (today or date.today()).isoformat()
    return [dict(item, publishDate=publish_date) for item in FALLBACK_NEWS]
