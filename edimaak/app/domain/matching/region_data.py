"""
Built-in region grouping.

Cities in the same region (roughly 100 km apart or less) are interchangeable
for flexible-location matching. Entries are product configuration: keys are
ISO country codes, values are ``(region name, cities)`` in declaration order.
"""

REGIONS_BY_COUNTRY = {
    "DZ": [
        ("Région d'Alger", ["Alger", "Blida", "Boumerdès", "Tipaza", "Médéa", "Chlef"]),
        ("Kabylie", ["Tizi Ouzou", "Béjaïa", "Bouira", "Bordj Bou Arreridj"]),
        ("Région de Constantine", ["Constantine", "Mila", "Jijel", "Skikda", "Oum El Bouaghi"]),
        ("Région d'Annaba", ["Annaba", "El Tarf", "Guelma", "Souk Ahras"]),
        ("Région d'Oran", ["Oran", "Aïn Témouchent", "Mostaganem", "Mascara", "Sidi Bel Abbès", "Relizane"]),
        ("Région de Tlemcen", ["Tlemcen", "Saïda"]),
        ("Région de Sétif", ["Sétif", "Bordj Bou Arréridj", "M'Sila"]),
        ("Région de Batna", ["Batna", "Khenchela", "Tébessa", "Biskra"]),
        ("Sud algérien", ["Ouargla", "Ghardaïa", "El Oued", "Laghouat", "Béchar", "Djelfa", "Adrar", "Tamanrasset"]),
    ],
    "FR": [
        ("Île-de-France", ["Paris", "Versailles", "Saint-Denis", "Argenteuil", "Montreuil", "Créteil", "Nanterre", "Boulogne-Billancourt"]),
        ("Provence-Alpes-Côte d'Azur", ["Marseille", "Nice", "Toulon", "Aix-en-Provence", "Avignon", "Cannes", "Antibes"]),
        ("Auvergne-Rhône-Alpes", ["Lyon", "Saint-Étienne", "Grenoble", "Villeurbanne", "Clermont-Ferrand", "Annecy", "Valence"]),
        ("Nouvelle-Aquitaine", ["Bordeaux", "Limoges", "Poitiers", "Pau", "La Rochelle", "Bayonne", "Angoulême"]),
        ("Occitanie", ["Toulouse", "Montpellier", "Nîmes", "Perpignan", "Béziers", "Narbonne", "Carcassonne"]),
        ("Hauts-de-France", ["Lille", "Amiens", "Roubaix", "Tourcoing", "Dunkerque", "Calais", "Valenciennes"]),
        ("Grand Est", ["Strasbourg", "Reims", "Metz", "Nancy", "Mulhouse", "Colmar", "Troyes"]),
        ("Pays de la Loire", ["Nantes", "Angers", "Le Mans", "Saint-Nazaire", "Laval"]),
        ("Bretagne", ["Rennes", "Brest", "Quimper", "Lorient", "Vannes", "Saint-Malo", "Saint-Brieuc"]),
        ("Normandie", ["Rouen", "Le Havre", "Caen", "Cherbourg", "Évreux", "Dieppe"]),
        ("Centre-Val de Loire", ["Tours", "Orléans", "Bourges", "Blois", "Chartres"]),
        ("Bourgogne-Franche-Comté", ["Dijon", "Besançon", "Chalon-sur-Saône", "Auxerre", "Mâcon"]),
    ],
    "BE": [
        ("Bruxelles-Capitale", ["Bruxelles", "Schaerbeek", "Anderlecht", "Ixelles", "Molenbeek"]),
        ("Région flamande", ["Anvers", "Gand", "Bruges", "Louvain", "Malines", "Courtrai", "Ostende", "Hasselt"]),
        ("Wallonie", ["Charleroi", "Liège", "Namur", "Mons", "La Louvière", "Tournai", "Verviers", "Arlon"]),
    ],
    "MA": [
        ("Grand Casablanca", ["Casablanca", "Mohammedia", "El Jadida"]),
        ("Rabat-Salé-Kénitra", ["Rabat", "Salé", "Kénitra", "Témara"]),
        ("Fès-Meknès", ["Fès", "Meknès"]),
        ("Marrakech-Safi", ["Marrakech", "Safi", "Essaouira"]),
        ("Tanger-Tétouan", ["Tanger", "Tétouan", "Chefchaouen"]),
        ("Oriental", ["Oujda", "Nador", "Berkane"]),
        ("Souss-Massa", ["Agadir", "Taroudant", "Tiznit"]),
    ],
    "TN": [
        ("Grand Tunis", ["Tunis", "Ariana", "Ben Arous", "La Marsa", "La Goulette"]),
        ("Nord-Est", ["Bizerte", "Nabeul", "Hammamet", "Sousse", "Monastir", "Mahdia"]),
        ("Centre", ["Sfax", "Kairouan", "Kasserine", "Gafsa"]),
        ("Sud", ["Gabès", "Médenine", "Djerba", "Tozeur", "Kébili"]),
    ],
    "DE": [
        ("Berlin-Brandenburg", ["Berlin", "Potsdam"]),
        ("Rhein-Ruhr", ["Cologne", "Düsseldorf", "Dortmund", "Essen", "Duisbourg", "Bochum", "Wuppertal"]),
        ("Munich", ["Munich", "Augsbourg", "Ingolstadt"]),
        ("Francfort-Rhin-Main", ["Francfort", "Wiesbaden", "Mayence", "Darmstadt"]),
        ("Hambourg", ["Hambourg", "Brême", "Kiel", "Lübeck"]),
        ("Stuttgart", ["Stuttgart", "Karlsruhe", "Mannheim", "Heidelberg"]),
    ],
    "ES": [
        ("Madrid", ["Madrid", "Alcalá de Henares", "Getafe", "Leganés", "Móstoles"]),
        ("Catalogne", ["Barcelone", "Terrassa", "Badalona", "Sabadell", "Tarragone", "Gérone"]),
        ("Andalousie", ["Séville", "Málaga", "Cordoue", "Grenade", "Cadix", "Almería", "Jerez"]),
        ("Valence", ["Valence", "Alicante", "Elche", "Castellón"]),
        ("Pays Basque", ["Bilbao", "Vitoria", "Saint-Sébastien"]),
    ],
    "IT": [
        ("Lombardie", ["Milan", "Brescia", "Bergame", "Monza", "Côme"]),
        ("Latium", ["Rome", "Latina", "Viterbe"]),
        ("Campanie", ["Naples", "Salerne", "Caserte"]),
        ("Piémont", ["Turin", "Novare", "Alexandrie", "Asti"]),
        ("Vénétie", ["Venise", "Vérone", "Padoue", "Vicence", "Trévise"]),
        ("Émilie-Romagne", ["Bologne", "Parme", "Modène", "Reggio d'Émilie", "Ravenne"]),
        ("Toscane", ["Florence", "Pise", "Livourne", "Sienne", "Prato"]),
        ("Sicile", ["Palerme", "Catane", "Messine", "Syracuse"]),
    ],
    "GB": [
        ("Grand Londres", ["Londres", "Westminster", "Camden", "Greenwich", "Croydon"]),
        ("Midlands", ["Birmingham", "Coventry", "Nottingham", "Leicester", "Derby"]),
        ("Nord-Ouest", ["Manchester", "Liverpool", "Sheffield", "Leeds", "Bradford"]),
        ("Écosse centrale", ["Glasgow", "Édimbourg", "Dundee", "Aberdeen"]),
        ("Sud-Ouest", ["Bristol", "Bath", "Exeter", "Plymouth"]),
    ],
    "NL": [
        ("Randstad", ["Amsterdam", "Rotterdam", "La Haye", "Utrecht", "Haarlem", "Leyde"]),
        ("Nord", ["Groningue", "Leeuwarden", "Assen"]),
        ("Est", ["Arnhem", "Nimègue", "Enschede", "Apeldoorn"]),
        ("Sud", ["Eindhoven", "Tilburg", "Breda", "Maastricht"]),
    ],
    "US": [
        ("New York Metro", ["New York", "Newark", "Jersey City", "Yonkers", "Stamford"]),
        ("Los Angeles Metro", ["Los Angeles", "Long Beach", "Anaheim", "Santa Ana", "Riverside", "San Bernardino"]),
        ("Chicago Metro", ["Chicago", "Aurora", "Naperville", "Joliet", "Elgin"]),
        ("San Francisco Bay", ["San Francisco", "Oakland", "San Jose", "Fremont", "Berkeley"]),
        ("Washington DC Metro", ["Washington", "Baltimore", "Arlington", "Alexandria"]),
        ("Miami Metro", ["Miami", "Fort Lauderdale", "West Palm Beach", "Hollywood"]),
        ("Dallas-Fort Worth", ["Dallas", "Fort Worth", "Arlington", "Plano", "Irving"]),
        ("Boston Metro", ["Boston", "Cambridge", "Worcester", "Providence"]),
    ],
    "CA": [
        ("Grand Toronto", ["Toronto", "Mississauga", "Brampton", "Hamilton", "Oshawa"]),
        ("Grand Montréal", ["Montréal", "Laval", "Longueuil", "Gatineau"]),
        ("Grand Vancouver", ["Vancouver", "Surrey", "Burnaby", "Richmond", "Coquitlam"]),
        ("Alberta", ["Calgary", "Edmonton", "Red Deer"]),
        ("Ottawa-Gatineau", ["Ottawa", "Gatineau"]),
    ],
    "TR": [
        ("Istanbul", ["Istanbul", "Kocaeli", "Bursa", "Sakarya"]),
        ("Ankara", ["Ankara", "Konya", "Eskişehir"]),
        ("Côte égéenne", ["Izmir", "Antalya", "Denizli", "Aydın"]),
        ("Sud-Est", ["Gaziantep", "Diyarbakır", "Şanlıurfa", "Adana", "Mersin"]),
    ],
    "AE": [
        ("Dubaï-Sharjah", ["Dubaï", "Charjah", "Ajman"]),
        ("Abu Dhabi", ["Abu Dhabi", "Al-Aïn"]),
    ],
    "SA": [
        ("Riyad", ["Riyad", "Al Kharj"]),
        ("Région Ouest", ["Djeddah", "La Mecque", "Médine", "Taëf"]),
        ("Région Est", ["Dammam", "Al Khobar", "Jubail", "Dhahran"]),
    ],
}

# Country names (French and English) accepted on trips and requests
COUNTRY_ALIASES = {
    "algérie": "DZ", "algeria": "DZ",
    "france": "FR",
    "belgique": "BE", "belgium": "BE",
    "maroc": "MA", "morocco": "MA",
    "tunisie": "TN", "tunisia": "TN",
    "allemagne": "DE", "germany": "DE",
    "espagne": "ES", "spain": "ES",
    "italie": "IT", "italy": "IT",
    "royaume-uni": "GB", "united kingdom": "GB", "uk": "GB",
    "pays-bas": "NL", "netherlands": "NL",
    "états-unis": "US", "united states": "US", "usa": "US",
    "canada": "CA",
    "turquie": "TR", "turkey": "TR",
    "émirats arabes unis": "AE", "uae": "AE",
    "arabie saoudite": "SA", "saudi arabia": "SA",
}
